"""Coercion of loosely-typed codec parameters.

Codec configurations usually come from JSON metadata or from the command
line, so a numeric parameter may arrive as a number or as its string
representation. The helpers below accept a small, explicit set of input
types and turn everything else into a `ConfigurationError`.
"""

# stdlib
import logging
from collections.abc import Iterable, Mapping
from numbers import Integral, Real
from typing import Any

# internals
from linc_codecs.errors import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")


def int_value(
    params: Mapping[str, Any], key: str, default: int, prefix: str = ""
) -> int:
    """
    Read an integer parameter.

    Parameters
    ----------
    params : Mapping
        Raw codec configuration.
    key : str
        Name of the parameter.
    default : int
        Value used when the key is absent or None.
    prefix : str
        Codec name prepended to error messages.

    Returns
    -------
    value : int
    """
    value = params.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigurationError(
            f"{prefix}{key} must be an integer but was a boolean: {value!r}"
        )
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        if float(value).is_integer():
            return int(value)
        raise ConfigurationError(
            f"{prefix}{key} must be an integer but was: {value!r}"
        )
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
        try:
            number = float(value.strip())
        except ValueError:
            number = None
        if number is not None and number.is_integer():
            return int(number)
        raise ConfigurationError(
            f"{prefix}{key} is not a valid integer: {value!r}"
        )
    raise ConfigurationError(
        f"{prefix}{key} must be an int or a str, got {type(value).__name__}"
    )


def float_value(
    params: Mapping[str, Any], key: str, default: float, prefix: str = ""
) -> float:
    """Read a floating point parameter."""
    value = params.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigurationError(
            f"{prefix}{key} must be a number but was a boolean: {value!r}"
        )
    if isinstance(value, Real):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise ConfigurationError(
                f"{prefix}{key} is not a valid number: {value!r}"
            ) from None
    raise ConfigurationError(
        f"{prefix}{key} must be a number or a str, got {type(value).__name__}"
    )


def bool_value(
    params: Mapping[str, Any], key: str, default: bool, prefix: str = ""
) -> bool:
    """Read a boolean parameter ("true"/"false", 0/1 and bools)."""
    value = params.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, Integral) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ConfigurationError(f"{prefix}{key} is not a valid boolean: {value!r}")


def str_value(
    params: Mapping[str, Any], key: str, default: str, prefix: str = ""
) -> str:
    """Read a string parameter. Bytes are decoded as ASCII."""
    value = params.get(key)
    if value is None:
        return default
    if isinstance(value, bytes):
        try:
            return value.decode("ascii")
        except UnicodeDecodeError:
            raise ConfigurationError(
                f"{prefix}{key} is not an ASCII string: {value!r}"
            ) from None
    if isinstance(value, str):
        return value
    raise ConfigurationError(
        f"{prefix}{key} must be a str, got {type(value).__name__}"
    )


def warn_unused(params: Mapping[str, Any], known: Iterable[str], codec: str) -> None:
    """Log parameters that a codec does not understand."""
    known = set(known) | {"id"}
    unused = sorted(str(k) for k in params if k not in known)
    if unused:
        logger.warning(f"{codec}: ignoring unknown parameter(s): {', '.join(unused)}")
