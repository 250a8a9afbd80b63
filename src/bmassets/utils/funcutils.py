import itertools
from collections.abc import Iterable, Iterator
from typing import TypeVar

T = TypeVar('T')


def flatten(ls: Iterable[Iterable[T]]) -> Iterator[T]:
    return itertools.chain.from_iterable(ls)
