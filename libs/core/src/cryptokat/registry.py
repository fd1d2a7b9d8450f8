from __future__ import annotations
from bisect import bisect_left
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple

from . import vectors
from .runners import RunContext, test_cipher, test_hash, test_rng

"""Name-sorted table of every algorithm the harness knows how to test.

Each algorithm appears under its generic name (``sha1``, ``cbc(aes)``) and
under the driver name of the bundled ``cryptography`` provider
(``sha1-pyca``, ``cbc-aes-pyca``). Lookups are binary searches, so the table
must stay sorted; :class:`Registry` refuses to build otherwise.
"""

Runner = Callable[[RunContext, "RegistryEntry", str, int], None]


@dataclass(frozen=True)
class RegistryEntry:
    name: str
    category: str  # 'hash', 'cipher' or 'rng'
    suite: Any
    runner: Runner
    fault_id: Optional[str] = None

    @property
    def vector_count(self) -> int:
        return len(self.suite)

    def run(self, ctx: RunContext, driver: str, flags: int = 0) -> None:
        self.runner(ctx, self, driver, flags)


class Registry:
    def __init__(self, entries: Iterable[RegistryEntry]) -> None:
        self._entries: Tuple[RegistryEntry, ...] = tuple(entries)
        self._names: Tuple[str, ...] = tuple(e.name for e in self._entries)
        for prev, cur in zip(self._names, self._names[1:]):
            if prev == cur:
                raise ValueError(f"duplicate registry entry {cur!r}")
            if prev > cur:
                raise ValueError(f"registry entries out of order: {prev!r} before {cur!r}")

    def find(self, name: str) -> int:
        """Index of ``name`` in the table, or -1."""
        i = bisect_left(self._names, name)
        if i < len(self._names) and self._names[i] == name:
            return i
        return -1

    def get(self, name: str) -> RegistryEntry:
        i = self.find(name)
        if i < 0:
            raise KeyError(name)
        return self._entries[i]

    def names(self) -> Tuple[str, ...]:
        return self._names

    def __getitem__(self, index: int) -> RegistryEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) >= 0


def _hash(name: str, suite: vectors.HashSuite, fault_id: Optional[str] = None) -> RegistryEntry:
    return RegistryEntry(name, "hash", suite, test_hash, fault_id)


def _cipher(name: str, suite: vectors.CipherSuite, fault_id: Optional[str] = None) -> RegistryEntry:
    return RegistryEntry(name, "cipher", suite, test_cipher, fault_id)


def _rng(name: str, suite: vectors.RngSuite, fault_id: Optional[str] = None) -> RegistryEntry:
    return RegistryEntry(name, "rng", suite, test_rng, fault_id)


# Keep in strict ASCII order: '(' < '-' < digits < '_' < letters.
registry = Registry((
    _rng("ansi-cprng-pyca", vectors.ANSI_CPRNG, "ansi-cprng"),
    _rng("ansi_cprng", vectors.ANSI_CPRNG, "ansi-cprng"),
    _cipher("cbc(aes)", vectors.AES_CBC),
    _cipher("cbc(des3_ede)", vectors.DES3_EDE_CBC, "cbc-des3"),
    _cipher("cbc-aes-pyca", vectors.AES_CBC),
    _cipher("cbc-des3-pyca", vectors.DES3_EDE_CBC, "cbc-des3"),
    _cipher("ctr(aes)", vectors.AES_CTR),
    _cipher("ctr-aes-pyca", vectors.AES_CTR),
    _cipher("ecb(aes)", vectors.AES_ECB),
    _cipher("ecb(des3_ede)", vectors.DES3_EDE_ECB, "ecb-des3"),
    _cipher("ecb-aes-pyca", vectors.AES_ECB),
    _cipher("ecb-des3-pyca", vectors.DES3_EDE_ECB, "ecb-des3"),
    _hash("hmac(sha1)", vectors.HMAC_SHA1, "hmac-sha1"),
    _hash("hmac(sha224)", vectors.HMAC_SHA224, "hmac-sha224"),
    _hash("hmac(sha256)", vectors.HMAC_SHA256, "hmac-sha256"),
    _hash("hmac(sha384)", vectors.HMAC_SHA384, "hmac-sha384"),
    _hash("hmac(sha512)", vectors.HMAC_SHA512, "hmac-sha512"),
    _hash("hmac-sha1-pyca", vectors.HMAC_SHA1, "hmac-sha1"),
    _hash("hmac-sha224-pyca", vectors.HMAC_SHA224, "hmac-sha224"),
    _hash("hmac-sha256-pyca", vectors.HMAC_SHA256, "hmac-sha256"),
    _hash("hmac-sha384-pyca", vectors.HMAC_SHA384, "hmac-sha384"),
    _hash("hmac-sha512-pyca", vectors.HMAC_SHA512, "hmac-sha512"),
    _hash("sha1", vectors.SHA1, "sha1"),
    _hash("sha1-pyca", vectors.SHA1, "sha1"),
    _hash("sha224", vectors.SHA224, "sha224"),
    _hash("sha224-pyca", vectors.SHA224, "sha224"),
    _hash("sha256", vectors.SHA256, "sha256"),
    _hash("sha256-pyca", vectors.SHA256, "sha256"),
    _hash("sha384", vectors.SHA384, "sha384"),
    _hash("sha384-pyca", vectors.SHA384, "sha384"),
    _hash("sha512", vectors.SHA512, "sha512"),
    _hash("sha512-pyca", vectors.SHA512, "sha512"),
))
