from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from .errors import OutOfMemoryError

"""Page-sized scratch buffers used to stage test inputs.

Every runner invocation owns one :class:`ScratchArena` of ``XBUFSIZE`` pages,
addressed by small integer page handles. Accesses are bounds-checked so a
bad layout surfaces as an exception here instead of silently spilling into a
neighbouring page.
"""

PAGE_SHIFT = 12
PAGE_SIZE = 1 << PAGE_SHIFT
PAGE_MASK = PAGE_SIZE - 1
XBUFSIZE = 8

PageAllocator = Callable[[int], bytearray]


def _default_allocator(size: int) -> bytearray:
    return bytearray(size)


def offset_in_page(offset: int) -> int:
    return offset & PAGE_MASK


def page_of(offset: int) -> int:
    return offset >> PAGE_SHIFT


class ScratchArena:
    def __init__(self, pages: List[bytearray]) -> None:
        self._pages: Optional[List[bytearray]] = pages

    @property
    def released(self) -> bool:
        return self._pages is None

    def __len__(self) -> int:
        return len(self._live())

    def _live(self) -> List[bytearray]:
        if self._pages is None:
            raise RuntimeError("scratch arena used after release")
        return self._pages

    def _check(self, handle: int, offset: int, length: int) -> bytearray:
        pages = self._live()
        if not 0 <= handle < len(pages):
            raise IndexError(f"page handle {handle} out of range (0..{len(pages) - 1})")
        if offset < 0 or length < 0 or offset + length > PAGE_SIZE:
            raise ValueError(
                f"range [{offset}, {offset + length}) outside page of {PAGE_SIZE} bytes"
            )
        return pages[handle]

    def page(self, handle: int) -> bytearray:
        return self._check(handle, 0, 0)

    def view(self, handle: int, offset: int, length: int) -> memoryview:
        page = self._check(handle, offset, length)
        return memoryview(page)[offset:offset + length]

    def write(self, handle: int, offset: int, data: bytes) -> memoryview:
        view = self.view(handle, offset, len(data))
        view[:] = data
        return view

    def clear(self, handle: int, offset: int = 0, length: Optional[int] = None) -> None:
        if length is None:
            length = PAGE_SIZE - offset
        page = self._check(handle, offset, length)
        page[offset:offset + length] = bytes(length)

    def _drop(self) -> None:
        self._pages = None


class ScratchPool:
    """Hands out one arena of ``XBUFSIZE`` pages per test invocation."""

    def __init__(self, allocator: PageAllocator = _default_allocator, npages: int = XBUFSIZE) -> None:
        self._allocator = allocator
        self._npages = npages
        self.outstanding = 0

    def acquire(self) -> ScratchArena:
        pages: List[bytearray] = []
        try:
            for _ in range(self._npages):
                page = self._allocator(PAGE_SIZE)
                if page is None or len(page) != PAGE_SIZE:
                    raise MemoryError("page allocator returned no page")
                pages.append(page)
        except MemoryError as exc:
            # nothing from this call stays reachable
            pages.clear()
            raise OutOfMemoryError(
                f"could not obtain {self._npages} scratch pages"
            ) from exc
        self.outstanding += 1
        return ScratchArena(pages)

    def release(self, arena: Optional[ScratchArena]) -> None:
        if arena is None or arena.released:
            return
        arena._drop()
        self.outstanding -= 1

    @contextmanager
    def pages(self) -> Iterator[ScratchArena]:
        arena = self.acquire()
        try:
            yield arena
        finally:
            self.release(arena)
