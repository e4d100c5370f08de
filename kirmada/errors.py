# ABOUTME: Exception types raised by the forecast normalizer and geocoding service.
# ABOUTME: UpstreamError covers provider/transport failures, SchemaError covers invalid assembled records.


class KirmadaError(Exception):
    """Base class for errors raised by the assistant's tool services."""


class UpstreamError(KirmadaError):
    """The weather provider returned an error payload or the HTTP call failed."""

    def __init__(self, reason: str, *, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class SchemaError(KirmadaError):
    """An assembled forecast record does not match the output schema."""

    def __init__(self, location: str, message: str, errors: list | None = None) -> None:
        super().__init__(f"{location}: {message}" if location else message)
        self.location = location
        self.message = message
        self.errors = errors or []
