from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..interfaces import MAX_IV_SIZE


def h(text: str) -> bytes:
    """Hex literal helper for fixture tables; whitespace is ignored."""
    return bytes.fromhex("".join(text.split()))


@dataclass(frozen=True)
class HashVector:
    plaintext: bytes
    digest: bytes
    key: bytes = b""
    taps: Optional[Tuple[int, ...]] = None

    @property
    def chunked(self) -> bool:
        return bool(self.taps)


@dataclass(frozen=True)
class CipherVector:
    key: bytes
    input: bytes
    result: bytes
    klen: Optional[int] = None
    iv: Optional[bytes] = None
    fail: bool = False
    weak_key: bool = False
    taps: Optional[Tuple[int, ...]] = None

    @property
    def key_size(self) -> int:
        return len(self.key) if self.klen is None else self.klen

    @property
    def chunked(self) -> bool:
        return bool(self.taps)

    def padded_iv(self) -> bytearray:
        iv = bytearray(MAX_IV_SIZE)
        if self.iv:
            iv[:len(self.iv)] = self.iv[:MAX_IV_SIZE]
        return iv


@dataclass(frozen=True)
class RngVector:
    key: bytes
    v: bytes
    dt: bytes
    result: bytes
    loops: int = 1

    @property
    def seed_material(self) -> bytes:
        return self.v + self.key + self.dt


@dataclass(frozen=True)
class HashSuite:
    vectors: Tuple[HashVector, ...] = ()

    def __len__(self) -> int:
        return len(self.vectors)


@dataclass(frozen=True)
class CipherSuite:
    encrypt: Tuple[CipherVector, ...] = ()
    decrypt: Tuple[CipherVector, ...] = ()

    def __len__(self) -> int:
        return len(self.encrypt) + len(self.decrypt)


@dataclass(frozen=True)
class RngSuite:
    vectors: Tuple[RngVector, ...] = ()

    def __len__(self) -> int:
        return len(self.vectors)
