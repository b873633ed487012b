"""Exception hierarchy shared by all layers of the NIP24 client."""

from __future__ import annotations

MSG_UNSUPPORTED_SCHEME = "Nieprawidłowy typ numeru"
MSG_TRANSPORT = "Nie udało się nawiązać połączenia z serwisem NIP24"
MSG_MALFORMED = "Odpowiedź serwisu NIP24 ma nieprawidłowy format"
MSG_INVALID_CONTACT = "Dane kontaktowe zawierają niedozwolone znaki"


class Nip24Error(Exception):
    """Base class for every failure reported by the client."""

    default_message = ""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidIdentifierError(Nip24Error):
    """The identifier failed local validation; nothing was sent."""

    def __init__(self, label: str, number: str | None = None) -> None:
        super().__init__(f"Numer {label} jest nieprawidłowy")
        self.label = label
        self.number = number


class UnsupportedSchemeError(Nip24Error):
    """The number type tag is not one of the supported schemes."""

    default_message = MSG_UNSUPPORTED_SCHEME

    def __init__(self, number_type: object = None) -> None:
        super().__init__()
        self.number_type = number_type


class InvalidRequestError(Nip24Error):
    """Request content cannot be encoded for the service."""

    default_message = MSG_INVALID_CONTACT


class TransportError(Nip24Error):
    """Connection, timeout or empty response."""

    default_message = MSG_TRANSPORT


class SigningError(TransportError):
    """The MAC authorization header could not be produced."""


class MalformedResponseError(Nip24Error):
    """The response body is not a parsable XML document."""

    default_message = MSG_MALFORMED


class ServiceError(Nip24Error):
    """The service rejected the request with an error envelope."""

    def __init__(self, code: str, description: str) -> None:
        super().__init__(description)
        self.code = code
        self.description = description

    def __repr__(self) -> str:
        return f"ServiceError(code={self.code!r}, description={self.description!r})"
