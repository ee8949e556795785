"""JPEG2000 raster service backed by glymur/OpenJPEG."""

# stdlib
import logging
import os.path as op
import tempfile
from types import ModuleType

# externals
import numpy as np

# internals
from linc_codecs.errors import MissingDependencyError, NativeCallError

logger = logging.getLogger(__name__)

NO_J2K_MSG = (
    "The JPEG2000 codec requires glymur and the OpenJPEG (>= 2) shared "
    "library. Install them with `pip install glymur` and "
    "`conda install openjpeg` (or your system's openjpeg package); if "
    "OpenJPEG is installed in a non standard location, add it to the library "
    "search path (LD_LIBRARY_PATH / DYLD_LIBRARY_PATH) or point glymur to it "
    "in ~/.config/glymur/glymurrc."
)

# A single decomposition level, as used by the LINC JPEG2000 writers.
NUM_RESOLUTIONS = 2


def get_service() -> ModuleType:
    """
    Find the imaging service.

    Returns
    -------
    glymur : module

    Raises
    ------
    MissingDependencyError
        If glymur is not installed or cannot find OpenJPEG.
    """
    try:
        import glymur
    except ImportError as e:
        raise MissingDependencyError(NO_J2K_MSG) from e
    version = glymur.version.openjpeg_version
    try:
        major = int(version.split(".")[0])
    except ValueError:
        major = 0
    if major < 2:
        raise MissingDependencyError(
            f"{NO_J2K_MSG} (found OpenJPEG version: {version})"
        )
    return glymur


def encode(
    image: np.ndarray, lossless: bool = True, quality: float = -1
) -> bytes:
    """
    Encode an image with shape (H, W) or (H, W, C) into a J2K codestream.

    Parameters
    ----------
    image : np.ndarray
        Image in native byte order.
    lossless : bool
        Use the reversible wavelet transform.
    quality : float
        Target PSNR (dB) of lossy encoding. Ignored if `lossless`.
    """
    glymur = get_service()
    opt = {"numres": NUM_RESOLUTIONS}
    if lossless:
        opt["irreversible"] = False
    else:
        opt["irreversible"] = True
        if quality > 0:
            opt["psnr"] = [quality]
    with tempfile.TemporaryDirectory() as tmp:
        path = op.join(tmp, "chunk.j2k")
        try:
            glymur.Jp2k(path, data=np.ascontiguousarray(image), **opt)
        except (RuntimeError, ValueError) as e:
            raise NativeCallError(f"j2k: encoding failed: {e}") from e
        with open(path, "rb") as f:
            return f.read()


def decode(codestream: bytes) -> np.ndarray:
    """Decode a J2K codestream into an array with shape (H, W[, C])."""
    glymur = get_service()
    with tempfile.TemporaryDirectory() as tmp:
        path = op.join(tmp, "chunk.j2k")
        with open(path, "wb") as f:
            f.write(codestream)
        try:
            return glymur.Jp2k(path)[:]
        except (RuntimeError, ValueError) as e:
            raise NativeCallError(f"j2k: decoding failed: {e}") from e
