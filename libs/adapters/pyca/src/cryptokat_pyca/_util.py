from __future__ import annotations
from typing import Iterator, Sequence

from cryptokat.interfaces import ProviderError


def iter_segments(segments: Sequence[memoryview], nbytes: int) -> Iterator[bytes]:
    """Yield the first ``nbytes`` of a segment list, one segment at a time."""
    remaining = nbytes
    for seg in segments:
        if remaining <= 0:
            break
        take = min(len(seg), remaining)
        yield bytes(seg[:take])
        remaining -= take
    if remaining > 0:
        raise ProviderError(f"segments hold {nbytes - remaining} bytes, {nbytes} requested")


def gather(segments: Sequence[memoryview], nbytes: int) -> bytes:
    return b"".join(iter_segments(segments, nbytes))


def scatter_into(segments: Sequence[memoryview], data: bytes) -> None:
    """Write ``data`` across the segments in order, touching nothing past its end."""
    pos = 0
    for seg in segments:
        if pos >= len(data):
            break
        take = min(len(seg), len(data) - pos)
        seg[:take] = data[pos:pos + take]
        pos += take
    if pos < len(data):
        raise ProviderError(f"segments too short for {len(data)} bytes of output")


def xor16(a: bytes, b: bytes) -> bytes:
    return (int.from_bytes(a, "big") ^ int.from_bytes(b, "big")).to_bytes(16, "big")
