"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InvalidInputError(ValidationError):
    """Raised when merge arguments are rejected (empty symbol, qty <= 0, cost < 0)."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_INPUT")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class FetchError(AppError):
    """Raised by price providers on network failure or an unusable response."""

    def __init__(self, symbol: str, reason: str):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Failed to fetch {symbol}: {reason}", code="FETCH_FAILURE")


class NoDataError(ValidationError):
    """Raised when there are no holdings to export."""

    def __init__(self, message: str = "No data to export!"):
        super().__init__(message, code="NO_DATA")


class SnapshotError(AppError):
    """Base exception for snapshot import failures."""


class MalformedFileError(SnapshotError):
    """Raised when a snapshot cannot be decoded or parsed."""

    def __init__(self, message: str = "Error parsing JSON file."):
        super().__init__(message, code="MALFORMED_FILE")


class NotAListError(SnapshotError):
    """Raised when a snapshot's top-level value is not a list."""

    def __init__(self, message: str = "Invalid file format: Not a list of stocks."):
        super().__init__(message, code="NOT_A_LIST")


class SchemaError(SnapshotError):
    """Raised when a snapshot record is missing symbol, qty or cost."""

    def __init__(self, message: str = "Invalid file format: Missing required fields."):
        super().__init__(message, code="SCHEMA_ERROR")
