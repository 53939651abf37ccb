# app/errors.py


class TypeforgeError(Exception):
    """Base class for errors raised at the catalog and storage boundaries."""


class DatabaseError(TypeforgeError):
    pass


class ValidationError(TypeforgeError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class TextNotFound(TypeforgeError, KeyError):
    def __init__(self, ident):
        super().__init__(f"No practice text with id {ident!r}")
        self.ident = ident

    def __str__(self) -> str:
        return self.args[0]
