import threading
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class LazySequence(Generic[T]):
    """
    A sequence that pulls elements from an iterable only when asked for them
    and keeps every element it has produced.

    Iterating twice walks the cache the second time; the source is never
    advanced past what some caller has actually consumed. One lock guards the
    source, so concurrent readers never compute the same element twice and
    never see a half-built one. If the source raises, the error is kept and
    raised again for anyone reading past the last good element.
    """

    def __init__(self, source: Iterable[T]):
        self._source: Optional[Iterator[T]] = iter(source)
        self._cache: List[T] = []
        self._error: Optional[BaseException] = None
        self._lock = threading.Lock()

    def _fill(self, index: int) -> bool:
        """Make sure element `index` is cached. False once the source is exhausted."""
        if index < len(self._cache):
            return True
        with self._lock:
            while len(self._cache) <= index:
                if self._error is not None:
                    raise self._error
                if self._source is None:
                    return False
                try:
                    item = next(self._source)
                except StopIteration:
                    self._source = None
                    return False
                except BaseException as e:
                    self._error = e
                    self._source = None
                    raise
                self._cache.append(item)
            return True

    def __iter__(self) -> Iterator[T]:
        i = 0
        while self._fill(i):
            yield self._cache[i]
            i += 1

    def __getitem__(self, index: int) -> T:
        if index < 0:
            self.force()
            return self._cache[index]
        if not self._fill(index):
            raise IndexError(f"LazySequence index {index} out of range")
        return self._cache[index]

    def __len__(self) -> int:
        self.force()
        return len(self._cache)

    def __bool__(self) -> bool:
        return self._fill(0)

    def force(self) -> "LazySequence[T]":
        for _ in self:
            pass
        return self

    @property
    def evaluated(self) -> int:
        """Number of elements produced so far."""
        return len(self._cache)

    @property
    def done(self) -> bool:
        return self._source is None and self._error is None

    def __repr__(self) -> str:
        state = "done" if self.done else "pending"
        return f"LazySequence({self.evaluated} evaluated, {state})"
