"""
Failure Explanation Envelope.

Defines the response envelope used to report classified failures to API
clients, and the KnownError hierarchy raised by services.

Response types:
- KnownFailure: System knows why it failed
- UnknownFailure: System does not know why it failed

Any KnownError escaping a route is converted into a finalized ApiResponse
by the exception handler registered in main.py, using the error's
status_code as the HTTP status.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    FILE_TOO_LARGE = "file_too_large"

    # Service failures
    STORAGE_FAILURE = "storage_failure"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel):
    """
    Response envelope for classified failures.

    Every failure is classified into an outcome type so that no failure
    reaches the client unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details",
    )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: Storage unavailable, unsupported file type.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class EmptyBatchError(KnownError):
    """Raised when an upload request carries no files."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.MISSING_REQUIRED,
            message="No files uploaded",
            suggestion="Attach at least one image file.",
            status_code=400,
        )


class BatchTooLargeError(KnownError):
    """Raised when a bulk upload carries more files than a full deck."""

    def __init__(self, file_count: int, max_files: int) -> None:
        self.file_count = file_count
        self.max_files = max_files
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Too many files: {file_count} uploaded, at most {max_files} allowed",
            suggestion="Split the upload into smaller batches.",
            status_code=400,
        )


class UnsupportedMediaTypeError(KnownError):
    """Raised for files that are not JPEG, PNG or WebP images."""

    def __init__(self, filename: str, content_type: str | None) -> None:
        self.filename = filename
        self.content_type = content_type
        super().__init__(
            kind=FailureKind.UNSUPPORTED_MEDIA_TYPE,
            message="Invalid file type. Only JPEG, PNG, and WebP are allowed.",
            detail=f"{filename}: {content_type or 'unknown type'}",
            status_code=415,
        )


class FileTooLargeError(KnownError):
    """Raised for files above the per-file size limit."""

    def __init__(self, filename: str, size: int, max_bytes: int) -> None:
        self.filename = filename
        self.size = size
        self.max_bytes = max_bytes
        super().__init__(
            kind=FailureKind.FILE_TOO_LARGE,
            message=f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.",
            detail=f"{filename}: {size} bytes",
            status_code=413,
        )


class StorageError(KnownError):
    """
    Raised when the entity store or upload directory rejects a write.

    Fatal to the current batch. Records written before the failure are not
    rolled back by the pipeline.
    """

    def __init__(self, operation: str, detail: str | None = None) -> None:
        self.operation = operation
        super().__init__(
            kind=FailureKind.STORAGE_FAILURE,
            message=f"Failed to {operation}",
            detail=detail,
            suggestion="Retry the upload. If this persists, please report the issue.",
            status_code=500,
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

UNKNOWN_FAILURE_MESSAGE = (
    "I failed and I don't know why. Try simplifying the request or retrying."
)
UNKNOWN_FAILURE_SUGGESTION = "If this persists, please report the issue."


def finalize_response(response: ApiResponse) -> ApiResponse:
    """
    Check a failure response before it leaves the service.

    Raises:
        ValueError: If the response carries no failure details
    """
    if response.failure is None:
        raise ValueError(f"{response.outcome.value} response must have failure details")
    return response


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse:
    """
    Create a finalized unknown failure response from an exception.

    The message is fixed and cannot be customized.
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    response = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=UNKNOWN_FAILURE_MESSAGE,
            detail=detail,
            suggestion=UNKNOWN_FAILURE_SUGGESTION,
        ),
    )

    return finalize_response(response)
