from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from cryptokat.interfaces import ProviderError

from ._registry import transforms
from ._util import xor16

BLOCK_SIZE = 16
KEY_SIZE = 16


@transforms.register("ansi_cprng")
@transforms.register("ansi-cprng-pyca")
class AnsiCprng:
    """ANSI X9.31 appendix A.2.4 generator with AES-128 as the block cipher.

    Seed layout is ``V | K | DT`` (16 bytes each). Every output block is
    ``R = E(K, E(K, DT) ^ V)``; afterwards ``V = E(K, R ^ I)`` and DT is
    incremented as a 128-bit big-endian counter.
    """

    kind = "rng"
    seed_size = BLOCK_SIZE + KEY_SIZE + BLOCK_SIZE

    def __init__(self) -> None:
        self._encrypt = None
        self._v = b""
        self._dt = b""
        self._leftover = b""

    def reset(self, seed: bytes) -> None:
        if len(seed) < self.seed_size:
            raise ProviderError(f"seed of {len(seed)} bytes, need {self.seed_size}")
        v = seed[:BLOCK_SIZE]
        key = seed[BLOCK_SIZE:BLOCK_SIZE + KEY_SIZE]
        dt = seed[BLOCK_SIZE + KEY_SIZE:self.seed_size]
        # one ECB context for the lifetime of the seed; update() is stateless in ECB
        self._encrypt = Cipher(algorithms.AES(bytes(key)), modes.ECB()).encryptor().update
        self._v = bytes(v)
        self._dt = bytes(dt)
        self._leftover = b""

    def _next_block(self) -> bytes:
        enc = self._encrypt
        i = enc(self._dt)
        r = enc(xor16(i, self._v))
        self._v = enc(xor16(r, i))
        self._dt = ((int.from_bytes(self._dt, "big") + 1) % (1 << 128)).to_bytes(BLOCK_SIZE, "big")
        return r

    def get_bytes(self, count: int) -> bytes:
        if self._encrypt is None:
            raise ProviderError("ansi_cprng used before reset")
        out = self._leftover
        while len(out) < count:
            out += self._next_block()
        self._leftover = out[count:]
        return out[:count]
