"""Error taxonomy for the news audio pipeline."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for errors raised by pipeline stages."""


class ProviderFailure(PipelineError):
    """A provider call raised, timed out, or returned an unusable result."""

    def __init__(self, provider: str, cause: BaseException | str):
        self.provider = provider
        self.cause = cause
        super().__init__(f"{provider} failed: {cause}")


class EmptyResult(ProviderFailure):
    """A provider call succeeded but returned nothing usable."""

    def __init__(self, provider: str):
        super().__init__(provider, "empty result")


class BatchFailure(PipelineError):
    """Both providers failed for a batch-level operation."""

    def __init__(self, operation: str, failures: list[ProviderFailure]):
        self.operation = operation
        self.failures = failures
        detail = "; ".join(str(failure) for failure in failures)
        super().__init__(f"{operation} failed on all providers ({detail})")


class StateStoreError(PipelineError):
    """The persisted batch is missing or cannot be parsed."""
