class AuditError(Exception):
    """Base class for errors raised by the audit services."""


class ConfigurationError(AuditError):
    """The provider credential is missing."""


class ProviderError(AuditError):
    """The provider answered but the payload is missing or unusable."""


class ExportError(AuditError):
    """The PDF report could not be rendered."""


class AnalysisInProgressError(AuditError):
    """An analysis is already running for the session."""


class UnsupportedFileError(AuditError):
    """An upload is neither a PDF nor an image."""
