"""
Tracer resolution errors.

Raised inside the resolver while a candidate is being loaded; always caught,
logged as a warning, and turned into a fallthrough to the next strategy.
"""

from typing import Optional


class TracerResolutionError(Exception):
    """Base class: a single candidate could not produce a tracer."""

    def __init__(self, identifier: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.identifier = identifier
        self.cause = cause


class TracerNotFoundError(TracerResolutionError):
    """The identifier does not resolve to any loadable type."""

    def __init__(self, identifier: str, cause: Optional[BaseException] = None):
        super().__init__(
            identifier,
            f"Could not load the specified class [{identifier}]",
            cause,
        )


class TracerConstructionError(TracerResolutionError):
    """The type was found but could not be instantiated with no arguments."""

    def __init__(self, identifier: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            identifier,
            f"Failed to instantiate the specified class [{identifier}]{detail}",
            cause,
        )


class TracerCapabilityError(TracerResolutionError):
    """The instantiated object does not implement the Tracer interface."""

    def __init__(self, identifier: str, actual_type: type):
        super().__init__(
            identifier,
            f"The specified class [{identifier}] is not a Tracer "
            f"(got {actual_type.__module__}.{actual_type.__qualname__})",
        )
        self.actual_type = actual_type
