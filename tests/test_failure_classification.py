"""
Tests for the Failure Classification System.

These tests verify the core invariant:

    No raw 500 error may reach the client.
    Every failure must be classified and explained.

These tests protect the failure semantics only.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from tarotdeck.models.failure import (
    ApiResponse,
    BatchTooLargeError,
    EmptyBatchError,
    FailureKind,
    FileTooLargeError,
    KnownError,
    OutcomeType,
    StorageError,
    UnsupportedMediaTypeError,
    create_unknown_failure,
    finalize_response,
)


class TestFailureEnvelope:
    """Tests for the ApiResponse failure envelope."""

    def test_known_failure_response_structure(self) -> None:
        """Known failure response has correct structure."""
        response = ApiResponse.known_failure(
            kind=FailureKind.INVALID_INPUT,
            message="Too many files",
            detail="80 uploaded",
        )

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.INVALID_INPUT

    def test_unknown_failure_uses_standard_message(self) -> None:
        """Unknown failures say they don't know why, and name the exception type."""
        response = create_unknown_failure(RuntimeError("boom"))

        assert response.outcome == OutcomeType.UNKNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.UNKNOWN
        assert "don't know why" in response.failure.message.lower()
        assert response.failure.detail == "RuntimeError"
        assert response.failure.suggestion

    def test_unknown_failure_without_type(self) -> None:
        response = create_unknown_failure(RuntimeError("boom"), include_type=False)

        assert response.failure is not None
        assert response.failure.detail is None


class TestFinalization:
    def test_finalize_returns_same_response(self) -> None:
        response = EmptyBatchError().to_response()

        assert finalize_response(response) is response

    def test_failure_without_detail_rejected(self) -> None:
        response = ApiResponse(outcome=OutcomeType.KNOWN_FAILURE)

        with pytest.raises(ValueError, match="must have failure details"):
            finalize_response(response)


class TestKnownErrorException:
    """Tests for KnownError exception handling."""

    def test_known_error_converts_to_response(self) -> None:
        """KnownError converts to ApiResponse correctly."""
        error = KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid format",
            detail="Expected multipart",
            status_code=400,
        )

        response = error.to_response()

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.INVALID_INPUT
        assert response.failure.message == "Invalid format"

    @pytest.mark.parametrize(
        ("error", "status_code", "kind"),
        [
            (EmptyBatchError(), 400, FailureKind.MISSING_REQUIRED),
            (BatchTooLargeError(80, 78), 400, FailureKind.INVALID_INPUT),
            (UnsupportedMediaTypeError("a.txt", "text/plain"), 415, FailureKind.UNSUPPORTED_MEDIA_TYPE),
            (FileTooLargeError("a.png", 6_000_000, 5 * 1024 * 1024), 413, FailureKind.FILE_TOO_LARGE),
            (StorageError("create card"), 500, FailureKind.STORAGE_FAILURE),
        ],
    )
    def test_upload_errors_classified(
        self, error: KnownError, status_code: int, kind: FailureKind
    ) -> None:
        assert error.status_code == status_code
        assert error.kind == kind
        assert error.to_response().outcome == OutcomeType.KNOWN_FAILURE

    def test_file_too_large_message(self) -> None:
        error = FileTooLargeError("a.png", 6_000_000, 5 * 1024 * 1024)

        assert error.message == "File too large. Maximum size is 5MB."
        assert error.detail == "a.png: 6000000 bytes"

    def test_unsupported_type_without_content_type(self) -> None:
        error = UnsupportedMediaTypeError("blob", None)

        assert error.detail == "blob: unknown type"


class TestExceptionHandlers:
    """Tests for global exception handlers in main.py."""

    async def test_health_endpoint_returns_success(self, client: AsyncClient) -> None:
        """Health endpoint returns successful response (baseline)."""
        response = await client.get("/health")

        assert response.status_code == 200

    async def test_known_error_rendered_as_envelope(
        self, client: AsyncClient, deck_id: str
    ) -> None:
        response = await client.post("/api/upload/bulk-deck", data={"deckId": deck_id})

        assert response.status_code == 400
        data = response.json()
        assert data["outcome"] == "known_failure"
        assert set(data) == {"outcome", "failure"}
        assert data["failure"]["suggestion"]

    async def test_database_error_returns_classified_500(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """
        Unexpected database errors return a classified 500, not a raw crash.
        """

        async def broken_get_decks(session):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

        monkeypatch.setattr("tarotdeck.api.decks.get_decks", broken_get_decks)

        response = await client.get("/api/decks")

        assert response.status_code == 500
        data = response.json()
        assert data["outcome"] == "unknown_failure"
        assert data["failure"]["kind"] == "unknown"
        assert data["failure"]["detail"] == "OperationalError"
