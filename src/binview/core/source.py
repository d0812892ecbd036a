"""
Read-only byte source backing the hex and decoded views.
"""

import logging
import mmap
import os
from typing import Optional, Union

from .errors import OutOfBoundsError

logger = logging.getLogger(__name__)


class ByteSource:
    """Immutable, randomly addressable sequence of bytes."""

    LARGE_FILE_THRESHOLD = 10 * 1024 * 1024

    def __init__(self, data: bytes = b'') -> None:
        self._data: Union[bytes, mmap.mmap] = bytes(data)
        self._file = None
        self.filename: Optional[str] = None
        self.is_mapped = False

    @classmethod
    def from_file(cls, filename: str) -> 'ByteSource':
        """
        Open a file as a byte source.

        Files above LARGE_FILE_THRESHOLD are memory-mapped read-only instead
        of being read into memory.

        Args:
            filename (str): Path of the file to open

        Returns:
            ByteSource: Source positioned over the whole file
        """

        source = cls()
        source.filename = filename

        file_size = os.path.getsize(filename)
        if file_size > cls.LARGE_FILE_THRESHOLD:
            source._file = open(filename, 'rb')
            source._data = mmap.mmap(source._file.fileno(), 0, access=mmap.ACCESS_READ)
            source.is_mapped = True
            logger.info("Memory-mapped %s (%d bytes)", filename, file_size)
            return source

        with open(filename, 'rb') as f:
            source._data = f.read()

        logger.debug("Loaded %s (%d bytes)", filename, len(source._data))
        return source

    def length(self) -> int:
        """Get the size of the source in bytes."""

        return len(self._data)

    def __len__(self) -> int:
        return self.length()

    def byte_at(self, position: int) -> int:
        """Get the byte at the given offset, raising OutOfBoundsError past the end."""

        if not 0 <= position < len(self._data):
            raise OutOfBoundsError(position, len(self._data))

        return self._data[position]

    def read(self, start: int, length: int) -> bytes:
        """
        Read a window of bytes, clamped to the end of the source.

        Args:
            start (int): Starting offset
            length (int): Maximum number of bytes to read

        Returns:
            bytes: The bytes in [start, start + length) that exist
        """

        if start < 0 or length < 0:
            raise OutOfBoundsError(min(start, length), len(self._data))

        end = min(start + length, len(self._data))
        if start >= end:
            return b''

        return bytes(self._data[start:end])

    def __getitem__(self, key: Union[int, slice]) -> Union[int, bytes]:
        if isinstance(key, slice):
            start, stop, step = key.indices(len(self._data))
            if step != 1:
                return bytes(self._data[start:stop:step])
            return self.read(start, max(0, stop - start))

        return self.byte_at(key)

    def close(self) -> None:
        """Release the memory map and file handle, if any."""

        if self.is_mapped:
            self._data.close()
            self._data = b''
            self.is_mapped = False

        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> 'ByteSource':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
