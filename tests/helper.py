import io


class ShortReadStream(io.RawIOBase):
    """Binary stream that never returns more than `step` bytes per read."""

    def __init__(self, data: bytes, step: int = 3):
        self._data = io.BytesIO(data)
        self._step = step

    def readable(self) -> bool:
        return True

    def readinto(self, buf) -> int:
        chunk = self._data.read(min(len(buf), self._step))
        buf[:len(chunk)] = chunk
        return len(chunk)
