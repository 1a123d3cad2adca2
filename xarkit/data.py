"""Sources and sinks for file data copied to and from the heap."""

from .errors import XarError


def carries_data(file_type, link_kind=None):
    """Return True if an entry of ``file_type`` has its contents in the heap.

    Regular files do, and so do hard links marked as the original.
    """
    if file_type == "file":
        return True
    return file_type == "hardlink" and link_kind == "original"


class BufferSource:
    """Reads file contents from an in-memory buffer."""

    def __init__(self, buffer):
        self._buffer = bytes(buffer)
        self.offset = 0
        self.total = 0

    def read(self, size):
        """Return up to ``size`` bytes; b'' once the buffer is used up."""
        if size < 0:
            raise ValueError("read size must not be negative")
        chunk = self._buffer[self.offset:self.offset + size]
        self.offset += len(chunk)
        self.total += len(chunk)
        return chunk


class BufferSink:
    """Collects extracted contents into a buffer of a fixed length."""

    def __init__(self, length):
        if length < 0:
            raise ValueError("buffer length must not be negative")
        self._buffer = bytearray(length)
        self.offset = 0

    def write(self, data):
        """Append ``data``; raises XarError if it would overrun the buffer."""
        data = bytes(data)
        end = self.offset + len(data)
        if end > len(self._buffer):
            raise XarError("data does not fit in the extraction buffer")
        self._buffer[self.offset:end] = data
        self.offset = end
        return len(data)

    @property
    def data(self):
        return bytes(self._buffer)

    @property
    def complete(self):
        return self.offset == len(self._buffer)


class StreamSource:
    """Reads file contents from a binary stream."""

    def __init__(self, stream):
        self._stream = stream
        self.total = 0

    def read(self, size):
        """Return up to ``size`` bytes from the stream."""
        chunk = self._stream.read(size) or b""
        self.total += len(chunk)
        return chunk


class StreamSink:
    """Writes extracted contents to a binary stream."""

    def __init__(self, stream):
        self._stream = stream
        self.total = 0

    def write(self, data):
        """Write all of ``data``, continuing after short writes."""
        view = memoryview(bytes(data))
        while view:
            written = self._stream.write(view)
            if written is None:
                written = len(view)
            if written <= 0:
                raise XarError("could not write file data")
            view = view[written:]
        self.total += len(data)
        return len(data)