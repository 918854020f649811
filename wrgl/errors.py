"""Exceptions raised when pipeline inputs cannot be trusted.

Both are fatal: downstream reporting joins assume fully valid models, so
callers should let them abort the run.
"""


class StructuralParseError(ValueError):
    """Input file is unreadable or does not have the expected shape.
    """
    pass


class DataIntegrityError(ValueError):
    """A record that otherwise qualifies is missing an expected value.
    """
    pass
