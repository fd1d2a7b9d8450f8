from __future__ import annotations
from typing import Optional, Type, Union

from cryptography.hazmat.primitives import hashes, hmac

from cryptokat.interfaces import KeyRejected, ProviderError

from ._registry import transforms

"""SHA-1/SHA-2 and HMAC transforms on top of ``cryptography.hazmat``."""

Context = Union[hashes.Hash, hmac.HMAC]


class DigestTransform:
    kind = "hash"
    algorithm: Type[hashes.HashAlgorithm] = hashes.SHA1

    def __init__(self) -> None:
        self.key: Optional[bytes] = None

    @property
    def digest_size(self) -> int:
        return self.algorithm.digest_size

    def set_key(self, key: bytes, flags: int = 0) -> None:
        raise KeyRejected(f"{self.algorithm.name} takes no key")

    def new(self) -> Context:
        return hashes.Hash(self.algorithm())


class HmacTransform(DigestTransform):
    def set_key(self, key: bytes, flags: int = 0) -> None:
        # HMAC accepts any key length; long keys are hashed first.
        self.key = bytes(key)

    def new(self) -> Context:
        if self.key is None:
            raise ProviderError(f"hmac({self.algorithm.name}) used before setkey")
        return hmac.HMAC(self.key, self.algorithm())


@transforms.register("sha1")
@transforms.register("sha1-pyca")
class SHA1(DigestTransform):
    algorithm = hashes.SHA1


@transforms.register("sha224")
@transforms.register("sha224-pyca")
class SHA224(DigestTransform):
    algorithm = hashes.SHA224


@transforms.register("sha256")
@transforms.register("sha256-pyca")
class SHA256(DigestTransform):
    algorithm = hashes.SHA256


@transforms.register("sha384")
@transforms.register("sha384-pyca")
class SHA384(DigestTransform):
    algorithm = hashes.SHA384


@transforms.register("sha512")
@transforms.register("sha512-pyca")
class SHA512(DigestTransform):
    algorithm = hashes.SHA512


@transforms.register("hmac(sha1)")
@transforms.register("hmac-sha1-pyca")
class HmacSHA1(HmacTransform):
    algorithm = hashes.SHA1


@transforms.register("hmac(sha224)")
@transforms.register("hmac-sha224-pyca")
class HmacSHA224(HmacTransform):
    algorithm = hashes.SHA224


@transforms.register("hmac(sha256)")
@transforms.register("hmac-sha256-pyca")
class HmacSHA256(HmacTransform):
    algorithm = hashes.SHA256


@transforms.register("hmac(sha384)")
@transforms.register("hmac-sha384-pyca")
class HmacSHA384(HmacTransform):
    algorithm = hashes.SHA384


@transforms.register("hmac(sha512)")
@transforms.register("hmac-sha512-pyca")
class HmacSHA512(HmacTransform):
    algorithm = hashes.SHA512
