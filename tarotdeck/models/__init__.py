from tarotdeck.models.card_identity import (
    CARD_BACK_NAME,
    Arcana,
    CardIdentity,
    Suit,
    UploadCategory,
)
from tarotdeck.models.failure import (
    ApiResponse,
    BatchTooLargeError,
    EmptyBatchError,
    FailureDetail,
    FailureKind,
    FileTooLargeError,
    KnownError,
    OutcomeType,
    StorageError,
    UnsupportedMediaTypeError,
    create_unknown_failure,
    finalize_response,
)

__all__ = [
    "ApiResponse",
    "Arcana",
    "BatchTooLargeError",
    "CARD_BACK_NAME",
    "CardIdentity",
    "EmptyBatchError",
    "FailureDetail",
    "FailureKind",
    "FileTooLargeError",
    "KnownError",
    "OutcomeType",
    "StorageError",
    "Suit",
    "UnsupportedMediaTypeError",
    "UploadCategory",
    "create_unknown_failure",
    "finalize_response",
]
