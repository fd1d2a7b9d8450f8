from __future__ import annotations
from typing import Optional, Tuple

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from cryptokat.interfaces import KeyRejected, ProviderError, TransformFlags

from ._registry import transforms

"""AES and 3DES-EDE in ECB, CBC and CTR mode.

Operations follow the in-place block cipher contract: the request IV is
read on entry and replaced with the chaining value for a follow-up call
(last ciphertext block for CBC, advanced counter for CTR).
"""


class BlockCipherTransform:
    kind = "cipher"
    block_size = 16
    key_sizes: Tuple[int, ...] = (16, 24, 32)
    mode_name = "ecb"

    def __init__(self) -> None:
        self.key: Optional[bytes] = None

    def set_key(self, key: bytes, flags: int = 0) -> None:
        if len(key) not in self.key_sizes:
            self.key = None
            raise KeyRejected(f"{len(key) * 8}-bit key not supported")
        self.key = bytes(key)

    def algorithm(self):
        return algorithms.AES(self.key)

    def mode(self, iv: bytes):
        return modes.ECB()

    def next_iv(self, iv: bytes, data_in: bytes, data_out: bytes, encrypt: bool) -> bytes:
        return iv

    def crypt(self, data: bytes, iv: bytes, encrypt: bool) -> Tuple[bytes, bytes]:
        """Returns ``(output, next_iv)``."""
        if self.key is None:
            raise ProviderError(f"{self.mode_name} transform used before setkey")
        if self.mode_name != "ctr" and len(data) % self.block_size:
            raise ProviderError(
                f"{len(data)} bytes is not a multiple of the {self.block_size}-byte block"
            )
        iv = iv[:self.block_size]
        cipher = Cipher(self.algorithm(), self.mode(iv))
        ctx = cipher.encryptor() if encrypt else cipher.decryptor()
        out = ctx.update(data) + ctx.finalize()
        return out, self.next_iv(iv, data, out, encrypt)


class CbcMixin:
    mode_name = "cbc"

    def mode(self, iv: bytes):
        return modes.CBC(iv)

    def next_iv(self, iv: bytes, data_in: bytes, data_out: bytes, encrypt: bool) -> bytes:
        ct = data_out if encrypt else data_in
        if not ct:
            return iv
        return ct[-self.block_size:]


class CtrMixin:
    mode_name = "ctr"

    def mode(self, iv: bytes):
        return modes.CTR(iv)

    def next_iv(self, iv: bytes, data_in: bytes, data_out: bytes, encrypt: bool) -> bytes:
        blocks = -(-len(data_in) // self.block_size)
        counter = (int.from_bytes(iv, "big") + blocks) % (1 << (8 * self.block_size))
        return counter.to_bytes(self.block_size, "big")


class Des3EdeMixin:
    block_size = 8
    key_sizes: Tuple[int, ...] = (24,)

    def set_key(self, key: bytes, flags: int = 0) -> None:
        k1, k2, k3 = key[:8], key[8:16], key[16:24]
        if flags & TransformFlags.REQ_WEAK_KEY and (k1 == k2 or k2 == k3):
            raise KeyRejected("3DES key degenerates to single DES")
        super().set_key(key, flags)

    def algorithm(self):
        return TripleDES(self.key)


@transforms.register("ecb(aes)")
@transforms.register("ecb-aes-pyca")
class AesEcb(BlockCipherTransform):
    pass


@transforms.register("cbc(aes)")
@transforms.register("cbc-aes-pyca")
class AesCbc(CbcMixin, BlockCipherTransform):
    pass


@transforms.register("ctr(aes)")
@transforms.register("ctr-aes-pyca")
class AesCtr(CtrMixin, BlockCipherTransform):
    pass


@transforms.register("ecb(des3_ede)")
@transforms.register("ecb-des3-pyca")
class Des3Ecb(Des3EdeMixin, BlockCipherTransform):
    pass


@transforms.register("cbc(des3_ede)")
@transforms.register("cbc-des3-pyca")
class Des3Cbc(Des3EdeMixin, CbcMixin, BlockCipherTransform):
    pass
