import os
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from types import TracebackType
from typing import overload

import numpy as np
from numpy.typing import ArrayLike


class ResourceFile(AbstractContextManager['ResourceFile']):
    """Read-only view over a memory-mapped asset file."""

    __slots__ = ('buffer', 'closed')

    def __init__(self, buffer: ArrayLike) -> None:
        self.buffer = memoryview(buffer)  # type: ignore[arg-type]
        self.closed = False

    def __len__(self) -> int:
        return len(self.buffer)

    def __exit__(
        self,
        __exc_type: type[BaseException] | None,
        __exc_value: BaseException | None,
        __traceback: TracebackType | None,
    ) -> bool | None:
        self.close()
        return None

    @overload
    def __getitem__(self, index: slice) -> memoryview: ...
    @overload
    def __getitem__(self, index: int) -> int: ...
    def __getitem__(self, index: slice | int) -> memoryview | int:
        if not self.closed:
            return self.buffer[index]
        raise OSError('I/O operation on closed file')  # noqa: TRY003

    @classmethod
    @contextmanager
    def load(cls, file_path: str) -> Iterator['ResourceFile']:
        # zero-length files cannot be mapped
        if os.path.getsize(file_path) == 0:
            data: ArrayLike = b''
        else:
            data = np.memmap(file_path, dtype='u1', mode='r')
        with cls(data) as res:
            yield res

    def close(self) -> None:
        self.closed = True


def read_file(file_path: str) -> bytes:
    with ResourceFile.load(file_path) as res:
        return bytes(res[: len(res)])
