class StegoError(Exception):
    """Base class for every failure of an embed or extract run."""


class AccessError(StegoError):
    """Path empty, file missing, unreadable or unwritable."""


class SizeError(StegoError):
    """Host below the minimum size, or payload over capacity."""


class FormatError(StegoError):
    """No usable header in the file, or the header disagrees with the file."""
