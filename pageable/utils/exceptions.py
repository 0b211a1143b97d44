class PageableError(Exception):
    """Base exception for all pageable errors."""


class InvalidArgument(PageableError, ValueError):
    """Raised when a required argument is missing or malformed."""


class ConcurrentModification(PageableError, RuntimeError):
    """Raised when a list is structurally modified behind a cursor or view."""


class PageLimitExceeded(PageableError):
    """Raised when a page walk would fetch more pages than allowed."""


class PagingLoopDetected(PageableError):
    """Raised when a server hands out a next-page identifier seen before."""
