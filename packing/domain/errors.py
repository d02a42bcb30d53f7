"""Error kinds raised by the packing core."""


class PackingError(Exception):
    """Base class for every error raised by the packing core."""


class ValidationError(PackingError, ValueError):
    """Empty or whitespace-only name on add/rename."""


class NotFoundError(PackingError, LookupError):
    """Operation on an id absent from a registry or item set."""


class PersistenceError(PackingError):
    """Underlying storage read/write failure."""


def require_name(value, what: str = "Name") -> str:
    '''Returns the trimmed value or raises ValidationError when it is empty.'''
    trimmed = str(value or "").strip()
    if not trimmed:
        raise ValidationError(f"{what} cannot be empty")
    return trimmed


__all__ = ['PackingError', 'ValidationError', 'NotFoundError', 'PersistenceError', 'require_name']
