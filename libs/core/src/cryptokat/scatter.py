from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from .errors import BufferOverrunError, InvalidVectorError
from .scratch import PAGE_SIZE, XBUFSIZE, ScratchArena, offset_in_page, page_of

"""Scatter layout simulator.

Chunked vectors are not staged contiguously. Chunk ``k`` lands at
``INTERESTING_OFFSETS[k]`` inside the scratch arena, which puts segments at
the very start of a page, deep inside a page, just past a page boundary and
close to the end of a page. A transform that walks its scatter list with an
off-by-one at a page edge produces a wrong digest/ciphertext there.
"""

# Offsets are absolute positions in the XBUFSIZE-page arena; each comment
# gives the resulting (page, position) with 4 KiB pages.

#: (0, 32) small aligned offset just after the start of the first page.
NEAR_PAGE_START = 32
#: (7, 3728) last page, 368 bytes before its end.
LAST_PAGE_TAIL = 32400
#: (0, 1) unaligned, first byte after a page start.
UNALIGNED_PAGE_START = 1
#: (2, 1) one byte past a page boundary.
PAST_PAGE_BOUNDARY = 8193
#: (5, 1742) deep into a page, away from both edges.
MID_PAGE_DEEP = 22222
#: (4, 717) odd offset in the first quarter of a page.
ODD_MID_PAGE = 17101
#: (6, 2773) odd offset past the middle of a page.
LATE_MID_PAGE = 27333
#: (0, 3000) within 1.1 KiB of the end of the first page.
FIRST_PAGE_TAIL = 3000

INTERESTING_OFFSETS: Tuple[int, ...] = (
    NEAR_PAGE_START,
    LAST_PAGE_TAIL,
    UNALIGNED_PAGE_START,
    PAST_PAGE_BOUNDARY,
    MID_PAGE_DEEP,
    ODD_MID_PAGE,
    LATE_MID_PAGE,
    FIRST_PAGE_TAIL,
)

MAX_CHUNKS = XBUFSIZE


@dataclass(frozen=True)
class Chunk:
    index: int
    page: int
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


class ScatterList:
    """Ordered segments handed to the transform, plus their placement."""

    def __init__(self, arena: ScratchArena, chunks: Sequence[Chunk]) -> None:
        self.chunks: Tuple[Chunk, ...] = tuple(chunks)
        self.views: List[memoryview] = [
            arena.view(c.page, c.offset, c.length) for c in self.chunks
        ]

    def __iter__(self) -> Iterator[memoryview]:
        return iter(self.views)

    def __len__(self) -> int:
        return len(self.views)

    @property
    def nbytes(self) -> int:
        return sum(c.length for c in self.chunks)

    def chunk_bytes(self, k: int) -> bytes:
        return bytes(self.views[k])

    def gather(self) -> bytes:
        return b"".join(bytes(v) for v in self.views)


def plan(taps: Sequence[int], guard: bool = False) -> Tuple[Chunk, ...]:
    """Place each tap at its interesting offset, rejecting impossible layouts."""
    if len(taps) > MAX_CHUNKS:
        raise InvalidVectorError(
            f"{len(taps)} chunks declared, at most {MAX_CHUNKS} supported"
        )
    chunks: List[Chunk] = []
    for k, size in enumerate(taps):
        if size < 0:
            raise InvalidVectorError(f"negative chunk size {size}", chunk=k)
        where = INTERESTING_OFFSETS[k]
        pos = offset_in_page(where)
        if pos + size > PAGE_SIZE:
            raise InvalidVectorError(
                f"chunk of {size} bytes at page offset {pos} crosses the page end",
                chunk=k,
            )
        chunks.append(Chunk(index=k, page=page_of(where), offset=pos, length=size))

    # guard bytes belong to their chunk for overlap purposes
    def _extent(c: Chunk) -> Tuple[int, int]:
        end = c.end + 1 if guard and c.end < PAGE_SIZE else c.end
        return c.offset, end

    for i, a in enumerate(chunks):
        for b in chunks[i + 1:]:
            if a.page != b.page:
                continue
            a0, a1 = _extent(a)
            b0, b1 = _extent(b)
            if a0 < b1 and b0 < a1:
                raise InvalidVectorError(
                    f"chunks {a.index} and {b.index} overlap on page {a.page}",
                    chunk=b.index,
                )
    return tuple(chunks)


def scatter(
    arena: ScratchArena,
    taps: Sequence[int],
    data: bytes,
    guard: bool = False,
) -> ScatterList:
    """Copy ``data`` into the arena following ``taps``.

    With ``guard`` the byte following every chunk (if still on the same
    page) is zeroed so :func:`check_overrun` can see writes past a chunk.
    """
    if sum(taps) != len(data):
        raise InvalidVectorError(
            f"chunk sizes add up to {sum(taps)} but the input is {len(data)} bytes"
        )
    chunks = plan(taps, guard=guard)
    consumed = 0
    for c in chunks:
        arena.write(c.page, c.offset, data[consumed:consumed + c.length])
        if guard and c.end < PAGE_SIZE:
            arena.clear(c.page, c.end, 1)
        consumed += c.length
    return ScatterList(arena, chunks)


def check_overrun(arena: ScratchArena, layout: ScatterList) -> None:
    """Look for non-zero bytes directly after each chunk, up to the page end."""
    for c in layout.chunks:
        page = arena.page(c.page)
        n = 0
        while c.end + n < PAGE_SIZE and page[c.end + n]:
            n += 1
        if n:
            stray = bytes(page[c.end:c.end + n])
            raise BufferOverrunError(
                f"result buffer corruption: {n} stray bytes after chunk on page {c.page}: {stray.hex()}",
                chunk=c.index,
            )
