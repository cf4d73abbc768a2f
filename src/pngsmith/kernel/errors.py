class PngError(Exception):
    """Base class for all errors raised while handling chunk containers."""
