"""Tests for result envelopes and domain models."""

import pytest

from deckinsight.models.failure import (
    ApiResponse,
    FailureKind,
    FetchError,
    FetchResult,
    HistoryImportError,
    KnownError,
    OutcomeType,
    ProfileAnalysisError,
)
from deckinsight.models.history import HistoryEntry
from deckinsight.models.validation import DuplicateCard, ValidationResult


class TestFetchResult:
    def test_empty_success_is_not_a_failure(self) -> None:
        result = FetchResult.ok([])

        assert result.is_ok
        assert result.unwrap() == []

    def test_failure_unwrap_raises_stored_error(self) -> None:
        error = FetchError("MTGGoldfish request failed: 503", source="x", status=503)
        result = FetchResult.fail(error)

        assert not result.is_ok
        with pytest.raises(FetchError) as excinfo:
            result.unwrap()
        assert excinfo.value is error

    def test_map_transforms_success(self) -> None:
        assert FetchResult.ok("<html>").map(len).unwrap() == 6

    def test_map_passes_failure_through(self) -> None:
        error = FetchError("boom", source="x")
        calls: list[str] = []

        mapped = FetchResult.fail(error).map(calls.append)

        assert mapped.error is error
        assert calls == []


class TestKnownErrors:
    def test_to_response(self) -> None:
        error = KnownError(FailureKind.INVALID_INPUT, "Deck list is empty", suggestion="Paste a deck")

        response = error.to_response()

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure.kind == FailureKind.INVALID_INPUT
        assert response.failure.suggestion == "Paste a deck"

    def test_fetch_error_detail(self) -> None:
        error = FetchError("failed", source="https://example.com", status=404)

        assert error.status_code == 502
        assert error.detail == "https://example.com responded with status 404"

    def test_fetch_error_without_status(self) -> None:
        error = FetchError("failed", source="https://example.com")

        assert error.detail == "https://example.com"
        assert error.kind == FailureKind.EXTERNAL_API_ERROR

    def test_profile_analysis_error(self) -> None:
        error = ProfileAnalysisError("Moxfield", "404 Not Found")

        assert str(error) == "Failed to analyze Moxfield profile: 404 Not Found"
        assert error.status_code == 502

    def test_history_import_error(self) -> None:
        error = HistoryImportError("expected a JSON array")

        assert error.kind == FailureKind.INVALID_INPUT
        assert error.status_code == 400


class TestApiResponse:
    def test_unknown_failure_has_fixed_message(self) -> None:
        response = ApiResponse.unknown_failure(detail="trace")

        assert response.outcome == OutcomeType.UNKNOWN_FAILURE
        assert response.failure.kind == FailureKind.UNKNOWN
        assert response.failure.message.startswith("I failed and I don't know why")


class TestHistoryEntry:
    def test_to_dict_omits_empty_fields(self) -> None:
        entry = HistoryEntry(timestamp="2024-01-01T00:00:00+00:00", commander="Atraxa")

        assert entry.to_dict() == {
            "commander": "Atraxa",
            "timestamp": "2024-01-01T00:00:00+00:00",
        }

    def test_to_dict_lists(self) -> None:
        entry = HistoryEntry(timestamp="t", colors=("W", "U"), cards=("Sol Ring",))

        data = entry.to_dict()

        assert data["colors"] == ["W", "U"]
        assert data["cards"] == ["Sol Ring"]


class TestValidationResult:
    def test_valid_without_errors(self) -> None:
        result = ValidationResult(total_cards=100, unique_cards=70, land_count=36)

        assert result.is_valid
        assert not result.has_duplicates

    def test_invalid_with_errors(self) -> None:
        result = ValidationResult(
            total_cards=100,
            unique_cards=69,
            land_count=36,
            duplicates=[DuplicateCard(name="sol ring", count=2)],
            errors=['Duplicate card: "sol ring" appears 2 times'],
        )

        assert not result.is_valid
        assert result.has_duplicates
