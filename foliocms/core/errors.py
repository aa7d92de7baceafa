"""
Error taxonomy shared by the store, the image storage and the HTTP layer.
"""


class ProjectStoreError(Exception):
    """Base class for every failure raised by the persistence core."""

    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class NotFound(ProjectStoreError):
    """Missing document, record or image."""

    status_code = 404


class MalformedStore(ProjectStoreError):
    """The canonical document is not valid JSON or not an array of objects."""


class ValidationFailed(ProjectStoreError):
    """Structural or semantic field violations."""

    status_code = 400

    def __init__(self, errors, message='Validation failed'):
        self.errors = list(errors)
        super().__init__(f"{message}: {', '.join(self.errors)}" if self.errors else message)


class IOFailure(ProjectStoreError):
    """Backup or write of the canonical document failed."""
