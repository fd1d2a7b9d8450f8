from __future__ import annotations

import pytest

from cryptokat.errors import OutOfMemoryError
from cryptokat.scratch import PAGE_SIZE, XBUFSIZE, ScratchPool, offset_in_page, page_of


def test_acquire_gives_eight_zeroed_pages() -> None:
    pool = ScratchPool()
    arena = pool.acquire()
    assert len(arena) == XBUFSIZE
    for h in range(XBUFSIZE):
        page = arena.page(h)
        assert len(page) == PAGE_SIZE
        assert not any(page)
    assert pool.outstanding == 1
    pool.release(arena)
    assert pool.outstanding == 0


def test_partial_allocation_failure_releases_everything() -> None:
    handed_out = []

    def flaky(size: int) -> bytearray:
        if len(handed_out) == 3:
            raise MemoryError("no more pages")
        page = bytearray(size)
        handed_out.append(page)
        return page

    pool = ScratchPool(allocator=flaky)
    with pytest.raises(OutOfMemoryError):
        pool.acquire()
    assert pool.outstanding == 0


def test_release_is_idempotent_and_blocks_reuse() -> None:
    pool = ScratchPool()
    arena = pool.acquire()
    pool.release(arena)
    pool.release(arena)
    assert pool.outstanding == 0
    assert arena.released
    with pytest.raises(RuntimeError):
        arena.page(0)


def test_context_manager_releases_on_error() -> None:
    pool = ScratchPool()
    with pytest.raises(KeyError):
        with pool.pages():
            assert pool.outstanding == 1
            raise KeyError("boom")
    assert pool.outstanding == 0


def test_bounds_checks() -> None:
    pool = ScratchPool()
    with pool.pages() as arena:
        with pytest.raises(IndexError):
            arena.page(XBUFSIZE)
        with pytest.raises(ValueError):
            arena.view(0, PAGE_SIZE - 4, 8)
        with pytest.raises(ValueError):
            arena.write(1, -1, b"x")


def test_write_clear_roundtrip() -> None:
    pool = ScratchPool()
    with pool.pages() as arena:
        view = arena.write(3, 100, b"\x01\x02\x03")
        assert bytes(view) == b"\x01\x02\x03"
        assert arena.page(3)[100:103] == b"\x01\x02\x03"
        arena.clear(3, 101, 1)
        assert arena.page(3)[100:103] == b"\x01\x00\x03"
        arena.clear(3)
        assert not any(arena.page(3))


def test_offset_helpers() -> None:
    assert page_of(32400) == 7
    assert offset_in_page(32400) == 3728
    assert page_of(8193) == 2
    assert offset_in_page(8193) == 1
