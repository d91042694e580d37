"""Exceptions raised by the external-service adapters."""


class FitnessPlannerError(Exception):
    """Base class for adapter failures the plan service converts into outcomes."""


class GenerationBackendError(FitnessPlannerError):
    """The language-model API could not be reached or rejected the request."""


class DocumentStoreError(FitnessPlannerError):
    """A document could not be written to or read from the store."""
