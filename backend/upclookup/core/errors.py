from typing import Optional


class UPCLookupError(Exception):
    """
    Base for errors surfaced to the caller of a lookup.
    `code` is the stable machine-readable name, `status_code` its HTTP mapping.
    """

    code = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"error": self.code, "message": self.message}


class UnauthenticatedError(UPCLookupError):
    code = "unauthenticated"
    status_code = 401


class PermissionDeniedError(UPCLookupError):
    code = "permission-denied"
    status_code = 403


class InvalidArgumentError(UPCLookupError):
    """
    Bad barcode input. `reason` says which rule failed:
      - "missing": not provided or not a string
      - "empty":   nothing left after stripping non-digits
      - "length":  digit count outside 12..14
    """

    code = "invalid-argument"
    status_code = 400

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason


class ProductNotFoundError(UPCLookupError):
    code = "not-found"
    status_code = 404
