"""Command line configuration."""
import ast
import json
from dataclasses import dataclass, field
from os import PathLike
from typing import Annotated, Any, Literal

from cyclopts import Parameter

from linc_codecs.codecs import Codec, create
from linc_codecs.errors import ConfigurationError


@Parameter(name="*")
@dataclass
class CodecConfig:
    """
    Configuration of the chunk codec.

    Parameters
    ----------
    compressor
        Compression method.
    compressor_opt
        Compression options, e.g. `--compressor-opt.clevel 9`.
        From Python, a JSON or dictionary literal string is also accepted.
    """

    compressor: Literal["blosc", "zlib", "j2k", "identity"] = "blosc"
    compressor_opt: dict[str, float | str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Parse `compressor_opt` when it was given as a string."""
        if isinstance(self.compressor_opt, str):
            self.compressor_opt = parse_options(self.compressor_opt)

    def to_properties(self) -> dict[str, Any]:
        """Properties understood by `linc_codecs.create`."""
        return {"id": self.compressor, **self.compressor_opt}

    def make_codec(self) -> Codec:
        return create(self.to_properties())


@Parameter(name="*")
@dataclass
class GeneralConfig:
    """
    General configuration.

    Parameters
    ----------
    log_level : {"debug", "info", "warning", "error", "critical"}
        Logging level.
    log_file
        Also write debug logs to this file.
    verbose : bool
        If True, set log_level to "debug".
    """

    log_level: Literal["debug", "info", "warning", "error", "critical"] = "info"
    log_file: PathLike[str] | str | None = None
    verbose: Annotated[bool, Parameter(name=["--verbose", "-v"])] = False

    def __post_init__(self) -> None:
        if self.verbose:
            self.log_level = "debug"


def parse_options(text: str) -> dict[str, Any]:
    """Parse a JSON or Python literal dictionary of codec options."""
    text = text.strip()
    if not text:
        return {}
    try:
        opt = json.loads(text)
    except json.JSONDecodeError:
        try:
            opt = ast.literal_eval(text)
        except (ValueError, SyntaxError):
            raise ConfigurationError(
                f"Cannot parse compressor options: {text!r}"
            ) from None
    if not isinstance(opt, dict):
        raise ConfigurationError(
            f"Compressor options must be a dictionary, got: {text!r}"
        )
    return opt
