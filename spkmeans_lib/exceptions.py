class SPKMeansError(Exception):
    """Base class for every error raised by spkmeans_lib."""


class ConfigurationError(SPKMeansError):
    """Input files are missing or unreadable; raised before any computation."""


class InvalidParameterError(SPKMeansError, ValueError):
    """A clustering parameter is out of its valid range."""


class DegenerateVectorError(SPKMeansError, ArithmeticError):
    """A zero-norm vector was met while the strict degenerate policy is active."""
