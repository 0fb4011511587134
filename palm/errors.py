"""Project-wide error types."""


class ProjectError(Exception):
    """Base for all Palm errors."""


class ValidationError(ProjectError):
    """Invalid input data."""


class ExternalServiceError(ProjectError):
    """Message store or transport failure. Retryable."""


class NotFoundError(ProjectError):
    """The requested item does not exist (anymore)."""


__all__ = ["ExternalServiceError", "NotFoundError", "ProjectError", "ValidationError"]
