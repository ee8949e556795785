"""Exceptions raised by linc_codecs.

Configuration problems derive from `ValueError` and are raised while a codec
is built. Everything that goes wrong while bytes are flowing derives from
`OSError`, so storage layers can treat them like any other I/O failure.
"""


class CodecError(Exception):
    """Base error for linc_codecs."""


class ConfigurationError(CodecError, ValueError):
    """Unknown codec id, bad parameter value or malformed key/value list."""


class CodecIOError(CodecError, OSError):
    """Failure while compressing or uncompressing a chunk."""


class MalformedInputError(CodecIOError):
    """Stored bytes do not describe a valid compressed chunk."""


class TruncatedInputError(MalformedInputError):
    """Input ended before a complete header or frame could be read."""


class NativeCallError(CodecIOError):
    """A native compression routine failed or returned inconsistent sizes."""


class MissingDependencyError(CodecIOError):
    """A library required by a codec cannot be found at runtime."""
