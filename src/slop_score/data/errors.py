"""Errors raised while loading corpus data."""


class DataFormatError(ValueError):
    """A corpus file is missing, corrupt, or not in the expected format."""
