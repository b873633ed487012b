"""Command line entry point for querying the NIP24 service."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .client import NIP24Client
from .config import load_settings
from .errors import (
    InvalidIdentifierError,
    InvalidRequestError,
    MalformedResponseError,
    ServiceError,
    TransportError,
    UnsupportedSchemeError,
)
from .numbers import Number
from .utils.logging_setup import setup_logger

logger = logging.getLogger(__name__)

ACTIONS = ("check", "invoice", "all", "vies", "update")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="nip24", description="NIP24 company data lookup")
    parser.add_argument("--number", required=True, help="Numer firmy (NIP, REGON, KRS, EU VAT)")
    parser.add_argument(
        "--type",
        default=Number.NIP.value,
        choices=[number.value for number in Number],
        help="Typ numeru (domyślnie: nip)",
    )
    parser.add_argument(
        "--action",
        default="invoice",
        choices=ACTIONS,
        help="Operacja (domyślnie: invoice)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Wymuś odświeżenie danych w serwisie (invoice/all)",
    )
    parser.add_argument("--phone", default="", help="Telefon (dla --action update)")
    parser.add_argument("--email", default="", help="E-mail (dla --action update)")
    parser.add_argument("--www", default="", help="Strona WWW (dla --action update)")
    parser.add_argument("--config", help="Plik YAML z ustawieniami klienta")
    parser.add_argument(
        "--verbose", action="store_true", help="Szczegółowe logowanie"
    )
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    setup_logger(logging.DEBUG if verbose else logging.INFO)


def _run_action(client: NIP24Client, args: argparse.Namespace) -> Any:
    if args.action == "check":
        return {"active": client.is_active(args.number, args.type)}
    if args.action == "invoice":
        return asdict(client.get_invoice_data(args.number, args.type, force=args.force))
    if args.action == "all":
        return asdict(client.get_all_data(args.number, args.type, force=args.force))
    if args.action == "vies":
        return asdict(client.get_vies_data(args.number))
    return {
        "updated": client.update_contact_data(
            args.number, args.phone, args.email, args.www, args.type
        )
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    dotenv_path = Path(".env")
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path)

    try:
        settings = load_settings(args.config)
    except (RuntimeError, ValueError, FileNotFoundError) as exc:
        logger.error("Konfiguracja niekompletna: %s", exc)
        return 2

    client = NIP24Client.from_settings(settings)

    try:
        result = _run_action(client, args)
    except (InvalidIdentifierError, UnsupportedSchemeError, InvalidRequestError) as exc:
        logger.error("%s", exc)
        return 2
    except ServiceError as exc:
        logger.error("NIP24 odrzucił zapytanie (kod %s): %s", exc.code, exc.description)
        return 1
    except (TransportError, MalformedResponseError) as exc:
        logger.error("%s", exc)
        return 3

    print(json.dumps(result, indent=2, ensure_ascii=False))

    if args.action == "check" and not result["active"]:
        logger.info("Firma nieaktywna: %s", client.last_error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
