class SwiftlinkError(Exception):
    """Base class for registry errors."""


class InvalidURL(SwiftlinkError, ValueError):
    pass


class UniqueViolation(SwiftlinkError):
    """Insert rejected by a uniqueness constraint on the links table."""

    def __init__(self, constraint: str = ""):
        self.constraint = constraint
        super().__init__(f"Unique constraint violated: {constraint or 'links'}")


class StorageFault(SwiftlinkError):
    """Connectivity, permission or unexpected database error."""


class LinkCreationError(SwiftlinkError):
    def __init__(self, message: str = "Error creating link"):
        super().__init__(message)
