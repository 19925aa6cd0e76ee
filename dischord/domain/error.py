"""Domain layer errors.

Every Store or service failure is exactly one of these kinds, so the
interface layer can map it to a transport outcome deterministically.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Caller supplied bad input (missing or out-of-range fields)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested or referenced resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AlreadyExistsError(DomainError):
    """Raised when creating an entity whose primary identifier is taken."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} already exists: {identifier}")


class InternalError(DomainError):
    """Unexpected backend failure (connection loss, unanticipated constraint)."""

    pass
