"""Exception taxonomy for the claim status service."""

from typing import Optional


class ClaimStatusError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error


class ConfigurationError(ClaimStatusError):
    """Raised when configuration is invalid or missing."""


class ClaimNotFoundError(ClaimStatusError):
    """Raised when a claim id is not present in the dataset."""

    def __init__(self, claim_id: int):
        super().__init__(f"claim {claim_id} not found")
        self.claim_id = claim_id


class SummarizationError(ClaimStatusError):
    """Base for failures of the external completion call."""


class CompletionFailure(SummarizationError):
    """The completion endpoint answered, but not with a usable completion."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"completion endpoint returned {status_code}")
        self.status_code = status_code
        self.body = body


class TransportFailure(SummarizationError):
    """The request never got a response (network or token acquisition error)."""
