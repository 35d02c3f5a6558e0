"""Typed errors raised by the link registry."""

from typing import Optional


class RegistryError(Exception):
    """Base class for errors a caller is expected to handle and display.
    
    Attributes:
        kind: Stable error name (e.g. ``InvalidUrl``)
        detail: Human readable reason
        row: 1-based batch row the error belongs to, if any
    """

    kind = "RegistryError"

    def __init__(self, detail: str, row: Optional[int] = None):
        self.detail = detail
        self.row = row
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.row is not None:
            return f"Row {self.row}: {self.detail}"
        return self.detail

    def at_row(self, row: int) -> "RegistryError":
        """Tag the error with the batch row it came from."""
        self.row = row
        self.args = (self.message,)
        return self

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "row": self.row}


class ValidationError(RegistryError):
    kind = "ValidationError"


class InvalidUrl(ValidationError):
    kind = "InvalidUrl"


class InvalidValidity(ValidationError):
    kind = "InvalidValidity"


class InvalidCodeFormat(ValidationError):
    kind = "InvalidCodeFormat"


class DuplicateCode(RegistryError):
    kind = "DuplicateCode"


class CodeExhausted(RegistryError):
    kind = "CodeExhausted"


class RedirectError(RegistryError):
    """Resolution failures. Both kinds send the visitor back to the start page."""

    kind = "RedirectError"

    def __init__(self, code: str, detail: str):
        self.code = code
        super().__init__(detail)


class NotFound(RedirectError):
    kind = "NotFound"

    def __init__(self, code: str):
        super().__init__(code, f"Short code '{code}' not found")


class Expired(RedirectError):
    kind = "Expired"

    def __init__(self, code: str):
        super().__init__(code, f"Short code '{code}' has expired")


class StoreIntegrityError(RuntimeError):
    """A store precondition was violated by its caller (programming error)."""


class StorageError(RuntimeError):
    """The persistence backend failed to read or write."""
