"""Exception hierarchy shared by the schema, proxy, storage and manager layers."""


class EntityMapError(Exception):
    """Base class for all entitymap errors."""

    pass


class SchemaError(EntityMapError, ValueError):
    """Raised when a schema or one of its property definitions is unusable."""

    pass


class NotLoadedError(EntityMapError, LookupError):
    """Raised when an entity is requested that nothing is tracking."""

    pass


class NotLoadableError(EntityMapError, RuntimeError):
    """Raised when an unresolved proxy is used as if it were loaded."""

    pass


class MissingIdError(EntityMapError, ValueError):
    """Raised when raw data without an ``id`` is constructed into a tracked entity."""

    pass


class IdentityConflictError(EntityMapError, RuntimeError):
    """Raised when a second object would be tracked under an occupied key."""

    pass
