"""orderedprops-specific exceptions and warnings"""

# ---------- #
# Exceptions
# ---------- #


class PropertiesFormatError(ValueError):
    """Raised when properties content (text or XML) is malformed."""


class MalformedEscapeError(PropertiesFormatError):
    """Raised when a \\uXXXX escape sequence is malformed."""


class MissingSeparatorError(PropertiesFormatError):
    """Raised when a line has no key-value separator but one is required."""


class InvalidStateError(Exception):
    """Raised when an instance is restored from state that misses required parts."""


# ---------- #
# Warnings
# ---------- #


class PropertiesWarning(Warning):
    """Base class for orderedprops warnings."""


class DuplicateKeyWarning(PropertiesWarning):
    """Raised when a key occurs more than once within one loaded document."""


class EncodingDetectionWarning(PropertiesWarning):
    """Raised when the encoding of byte input could not be detected and the
    configured encoding is used instead."""
