import numpy as np
import pytest


@pytest.fixture(
    scope="module",
    params=["empty", "abcabc", "random", "ramp"],
)
def payload(request) -> bytes:
    rng = np.random.default_rng(1234)
    return {
        "empty": b"",
        "abcabc": b"abcabc",
        "random": rng.integers(0, 256, 10_000, dtype=np.uint8).tobytes(),
        "ramp": np.arange(50_000, dtype="<u2").tobytes(),
    }[request.param]


@pytest.fixture
def glymur_service():
    """Skip when glymur or the OpenJPEG library is not available."""
    pytest.importorskip("glymur")
    from linc_codecs.errors import MissingDependencyError
    from linc_codecs.utils import raster_service

    try:
        return raster_service.get_service()
    except MissingDependencyError as e:
        pytest.skip(str(e))
