"""Exceptions raised by zodgen."""


class ZodGenError(Exception):
    """Base exception for schema generation errors."""

    pass


class UnknownReferenceError(ZodGenError):
    """Raised when a member names a type that the service does not define."""

    def __init__(self, names):
        self.names = sorted(set(names))
        super().__init__(
            f"Service references undefined types: {', '.join(self.names)}"
        )


class UnknownEntityKindError(ZodGenError):
    """Raised when an entity of an unrecognised kind reaches the generator."""

    pass
