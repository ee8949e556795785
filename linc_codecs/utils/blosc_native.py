"""Narrow binding to the native blosc library shipped with numcodecs.

This is the only module that talks to compiled blosc code. It exposes three
entry points:

* `compress(source, cname, clevel, shuffle, blocksize)` -> frame
* `decompress(frame, dest)` fills a caller-allocated buffer
* `introspect_header(header)` -> `FrameSizes`

The extension is imported on first use so that a missing or broken
installation surfaces as a `MissingDependencyError` when a blosc chunk is
actually processed, not when `linc_codecs` is imported.

Header sizes are read with numcodecs' `cbuffer_sizes` when the installed
release exposes it, and from the fixed header layout otherwise (recent
numcodecs releases made it private).

All native calls are serialized behind `_NATIVE_LOCK`: numcodecs may run
blosc with its global (non-reentrant) context, and chunk codecs are shared
between threads.
"""

# stdlib
import logging
import threading
from types import ModuleType

# internals
from linc_codecs.errors import (
    MalformedInputError,
    MissingDependencyError,
    NativeCallError,
)
from linc_codecs.utils.frame import (
    HEADER_SIZE,
    MAX_BUFFERSIZE,
    FrameHeader,
    FrameSizes,
)

logger = logging.getLogger(__name__)

NO_BLOSC_MSG = (
    "The blosc codec requires the native blosc library bundled with "
    "numcodecs, which could not be loaded. Install it with "
    "`pip install numcodecs` (a binary wheel includes c-blosc)."
)

# names of `numcodecs.blosc` this module relies on
ENTRY_POINTS = (
    "compress",
    "decompress",
    "list_compressors",
    "MAX_OVERHEAD",
    "VERSION_STRING",
)

_NATIVE_LOCK = threading.Lock()
_blosc: ModuleType | None = None


def _native() -> ModuleType:
    global _blosc
    if _blosc is None:
        try:
            from numcodecs import blosc
        except ImportError as e:
            raise MissingDependencyError(NO_BLOSC_MSG) from e
        missing = [name for name in ENTRY_POINTS if not hasattr(blosc, name)]
        if missing:
            raise MissingDependencyError(
                f"Unsupported numcodecs release: numcodecs.blosc lacks "
                f"{missing}. {NO_BLOSC_MSG}"
            )
        if blosc.MAX_OVERHEAD != HEADER_SIZE:
            raise MissingDependencyError(
                f"Unsupported blosc build: header size is {blosc.MAX_OVERHEAD} "
                f"bytes, expected {HEADER_SIZE}."
            )
        logger.debug(f"Loaded blosc {blosc.VERSION_STRING}")
        _blosc = blosc
    return _blosc


def available_compressors() -> list[str]:
    """Internal compressors compiled into the native library."""
    return list(_native().list_compressors())


def introspect_header(header: bytes) -> FrameSizes:
    """
    Read the sizes stored in a frame header.

    Raises
    ------
    NativeCallError
        If `header` is shorter than a frame header.
    MalformedInputError
        If the sizes exceed what blosc can produce.
    """
    if len(header) < HEADER_SIZE:
        raise NativeCallError(
            f"blosc: cannot introspect {len(header)} bytes, "
            f"a header is {HEADER_SIZE} bytes"
        )
    cbuffer_sizes = getattr(_native(), "cbuffer_sizes", None)
    if cbuffer_sizes is None:
        sizes = FrameHeader.unpack(header).sizes
    else:
        with _NATIVE_LOCK:
            nbytes, cbytes, blocksize = cbuffer_sizes(bytes(header[:HEADER_SIZE]))
        sizes = FrameSizes(int(nbytes), int(cbytes), int(blocksize))
    if sizes.nbytes > MAX_BUFFERSIZE or sizes.cbytes > MAX_BUFFERSIZE + HEADER_SIZE:
        raise MalformedInputError(
            f"blosc: header sizes exceed the {MAX_BUFFERSIZE} byte limit: "
            f"nbytes={sizes.nbytes}, cbytes={sizes.cbytes}"
        )
    return sizes


def compress(
    source: bytes, cname: str, clevel: int, shuffle: int, blocksize: int
) -> bytes:
    """
    Compress `source` into a single blosc frame (typesize 1).

    The returned buffer may be larger than the frame; callers read `cbytes`
    from its header to know how many bytes to keep.
    """
    blosc = _native()
    try:
        with _NATIVE_LOCK:
            frame = blosc.compress(
                source, cname.encode("ascii"), clevel, shuffle, blocksize
            )
    except (RuntimeError, ValueError) as e:
        raise NativeCallError(f"blosc: compression failed: {e}") from e
    return bytes(frame)


def decompress(frame: bytes, dest: bytearray) -> None:
    """
    Decompress a complete frame into `dest`.

    `dest` must be allocated by the caller with exactly the `nbytes`
    announced by the frame header.
    """
    blosc = _native()
    try:
        with _NATIVE_LOCK:
            blosc.decompress(frame, dest)
    except (RuntimeError, ValueError) as e:
        raise NativeCallError(f"blosc: decompression failed: {e}") from e
