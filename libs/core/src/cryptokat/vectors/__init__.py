"""Known-answer vector corpus, grouped into the suites the registry binds."""
from __future__ import annotations

from . import cipher, hash, rng
from .schema import CipherSuite, CipherVector, HashSuite, HashVector, RngSuite, RngVector

SHA1 = HashSuite(hash.SHA1)
SHA224 = HashSuite(hash.SHA224)
SHA256 = HashSuite(hash.SHA256)
SHA384 = HashSuite(hash.SHA384)
SHA512 = HashSuite(hash.SHA512)

HMAC_SHA1 = HashSuite(hash.HMAC_SHA1)
HMAC_SHA224 = HashSuite(hash.HMAC_SHA224)
HMAC_SHA256 = HashSuite(hash.HMAC_SHA256)
HMAC_SHA384 = HashSuite(hash.HMAC_SHA384)
HMAC_SHA512 = HashSuite(hash.HMAC_SHA512)

DES3_EDE_ECB = CipherSuite(encrypt=cipher.DES3_EDE_ENC, decrypt=cipher.DES3_EDE_DEC)
DES3_EDE_CBC = CipherSuite(encrypt=cipher.DES3_EDE_CBC_ENC, decrypt=cipher.DES3_EDE_CBC_DEC)
AES_ECB = CipherSuite(encrypt=cipher.AES_ENC, decrypt=cipher.AES_DEC)
AES_CBC = CipherSuite(encrypt=cipher.AES_CBC_ENC, decrypt=cipher.AES_CBC_DEC)
AES_CTR = CipherSuite(encrypt=cipher.AES_CTR_ENC, decrypt=cipher.AES_CTR_DEC)

ANSI_CPRNG = RngSuite(rng.ANSI_CPRNG)

__all__ = [
    "AES_CBC",
    "AES_CTR",
    "AES_ECB",
    "ANSI_CPRNG",
    "CipherSuite",
    "CipherVector",
    "DES3_EDE_CBC",
    "DES3_EDE_ECB",
    "HMAC_SHA1",
    "HMAC_SHA224",
    "HMAC_SHA256",
    "HMAC_SHA384",
    "HMAC_SHA512",
    "HashSuite",
    "HashVector",
    "RngSuite",
    "RngVector",
    "SHA1",
    "SHA224",
    "SHA256",
    "SHA384",
    "SHA512",
]
