"""Domain exceptions."""


class PontualError(Exception):
    """Base exception for Pontual."""

    pass


class PermissionDenied(PontualError):
    """User does not have the permission required by an operation."""

    def __init__(self, permission: str) -> None:
        self.permission = permission
        super().__init__(f"Você não tem permissão para: {permission}")


class NotFound(PontualError):
    """Requested resource was not found."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class DuplicateRecord(PontualError):
    """Record with the same unique key already exists."""

    pass


class ValidationError(PontualError):
    """Validation failed for input data."""

    pass


class StorageError(PontualError):
    """Persistence layer failed to complete a request."""

    pass
