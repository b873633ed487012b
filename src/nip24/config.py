"""Client settings from environment variables and an optional YAML file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

from .transport import DEFAULT_TIMEOUT

DEFAULT_URL: Final = "https://www.nip24.pl/api"

# setting name -> environment variable
ENV_VARS: Final[dict[str, str]] = {
    "key_id": "NIP24_KEY_ID",
    "key": "NIP24_KEY",
    "url": "NIP24_URL",
    "app": "NIP24_APP",
    "timeout": "NIP24_TIMEOUT",
}


@dataclass(frozen=True)
class Settings:
    key_id: str
    key: str = field(repr=False)
    url: str = DEFAULT_URL
    app: str = ""
    timeout: tuple[float, float] = DEFAULT_TIMEOUT


def parse_timeout(value: Any) -> tuple[float, float]:
    """Accept ``10``, ``"10"``, ``"5,30"`` or ``[5, 30]``."""

    if value is None or value == "":
        return DEFAULT_TIMEOUT
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, int | float):
        parts = [value]
    else:
        parts = list(value)

    try:
        numbers = [float(part) for part in parts]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Nieprawidłowy limit czasu: {value!r}") from exc

    if len(numbers) == 1:
        return (numbers[0], DEFAULT_TIMEOUT[1])
    if len(numbers) == 2:
        return (numbers[0], numbers[1])
    raise ValueError(f"Nieprawidłowy limit czasu: {value!r}")


def _load_yaml(path: str | Path) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Plik konfiguracyjny nie istnieje: {config_path}")

    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("Plik konfiguracyjny YAML musi zawierać słownik")

    return {str(key): value for key, value in data.items() if value is not None}


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Merge YAML settings with environment variables; the environment wins."""

    env = os.environ if environ is None else environ
    values: dict[str, Any] = _load_yaml(path) if path else {}

    for name, variable in ENV_VARS.items():
        env_value = env.get(variable)
        if env_value:
            values[name] = env_value

    key_id = str(values.get("key_id") or "").strip()
    key = str(values.get("key") or "").strip()
    if not key_id or not key:
        raise RuntimeError(
            "NIP24_KEY_ID i NIP24_KEY muszą być ustawione "
            "(zmienne środowiskowe lub plik konfiguracyjny)."
        )

    return Settings(
        key_id=key_id,
        key=key,
        url=str(values.get("url") or DEFAULT_URL).strip().rstrip("/"),
        app=str(values.get("app") or "").strip(),
        timeout=parse_timeout(values.get("timeout")),
    )
