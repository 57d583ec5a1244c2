"""
Failure classification and result envelopes.

Pure components (parser, validator, aggregator) never raise on data input;
they report findings in their result objects. Exceptions in this module are
for the edges:

- FetchError: a collaborator (scraper, API client) could not deliver data
- ProfileAnalysisError: a profile analysis could not be completed
- HistoryImportError: the strict history import rejected its payload

Collaborators do not raise FetchError directly. They return a FetchResult so
callers can tell an empty successful fetch from a failed one.

The HTTP layer turns any KnownError into an ApiResponse; anything else
becomes an unknown-failure ApiResponse with status 500.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"
    UNPARSABLE_RESPONSE = "unparsable_response"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")
U = TypeVar("U")


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
    """Error envelope returned with any non-2xx status."""

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the failure",
    )
    failure: FailureDetail = Field(
        ...,
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
        Example: profile not found upstream, malformed import payload.
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

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse":
        """Create an unknown failure response. The message is fixed."""
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="I failed and I don't know why. Try simplifying the request or retrying.",
                detail=detail,
                suggestion="If this persists, please report the issue.",
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


class FetchError(KnownError):
    """
    A collaborator failed to deliver data.

    Covers non-success HTTP statuses, transport failures and payloads
    that could not be parsed.
    """

    def __init__(
        self,
        message: str,
        source: str,
        status: int | None = None,
        kind: FailureKind = FailureKind.EXTERNAL_API_ERROR,
    ):
        self.source = source
        self.status = status
        detail = f"{source} responded with status {status}" if status is not None else source
        super().__init__(
            kind=kind,
            message=message,
            detail=detail,
            suggestion="Retry later; the upstream site may be rate limiting or down.",
            status_code=502,
        )


class ProfileAnalysisError(KnownError):
    """A user profile could not be analyzed because its data could not be fetched."""

    def __init__(self, platform: str, cause: str):
        self.platform = platform
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Failed to analyze {platform} profile: {cause}",
            suggestion="Check the username and that the profile is public.",
            status_code=502,
        )


class HistoryImportError(KnownError):
    """The strict history import rejected its payload."""

    def __init__(self, cause: str):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Failed to import history: {cause}",
            suggestion="Provide a JSON array previously produced by the history export.",
            status_code=400,
        )


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Outcome of a collaborator call: a value or a FetchError, never both.

    An empty list is a successful value. Only `error` signals failure.
    """

    value: T | None = None
    error: FetchError | None = None

    @classmethod
    def ok(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: FetchError) -> "FetchResult[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def map(self, func: Callable[[T], U]) -> "FetchResult[U]":
        """Transform a success value; failures pass through unchanged."""
        if self.error is not None:
            return FetchResult(error=self.error)
        return FetchResult(value=func(self.value))  # type: ignore[arg-type]

    def unwrap(self) -> T:
        """Return the value, raising the stored FetchError on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
