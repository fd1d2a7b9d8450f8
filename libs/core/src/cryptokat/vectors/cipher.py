"""Block cipher known-answer vectors.

3DES vectors are from OpenSSL, AES-ECB from FIPS-197, AES-CBC from RFC 3602
and NIST SP800-38A, AES-CTR from NIST SP800-38A appendix F.5. Decryption
tables are the encryption tables with input and result swapped.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Tuple

from .schema import CipherVector, h


def _decrypting(vectors: Tuple[CipherVector, ...]) -> Tuple[CipherVector, ...]:
    return tuple(replace(v, input=v.result, result=v.input) for v in vectors)


_SP800_38A_PLAINTEXT = h(
    "6bc1bee22e409f96e93d7e117393172a"
    "ae2d8a571e03ac9c9eb76fac45af8e51"
    "30c81c46a35ce411e5fbc1191a0a52ef"
    "f69f2445df4f9b17ad2b417be66c3710"
)
_AES_192_KEY = h("8e73b0f7da0e6452c810f32b809079e562f8ead2522c6b7b")
_AES_256_KEY = h("603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4")
_SP800_38A_CBC_IV = bytes(range(16))
_SP800_38A_CTR_IV = h("f0f1f2f3f4f5f6f7f8f9fafbfcfdfeff")

_DES3_EDE = (
    CipherVector(
        key=h("0123456789abcdef 5555555555555555 fedcba9876543210"),
        input=h("736f6d6564617461"),
        result=h("18d748e563620572"),
    ),
    CipherVector(
        key=h("0352020767208217 8602876659082198 64056abdfea93457"),
        input=h("7371756967676c65"),
        result=h("c07d2a0fa566fa30"),
    ),
    CipherVector(
        key=h("1046103489988020 9107d01589190101 19079210981a0101"),
        input=h("0000000000000000"),
        result=h("e1ef62c332fe825b"),
    ),
)

# K1 == K2 degrades 3DES to single DES; must be refused once weak keys are
# forbidden for the transform.
_DES3_EDE_WEAK = CipherVector(
    key=h("0123456789abcdef 0123456789abcdef fedcba9876543210"),
    input=h("736f6d6564617461"),
    result=bytes(8),
    fail=True,
    weak_key=True,
)

_DES3_EDE_CBC_KEY = h("e9c0ff2e760b6424 444d995a12d640c0 eac284e81495dbe8")
_DES3_EDE_CBC_IV = h("7d3388930f93b242")
_DES3_EDE_CBC_PLAINTEXT = h(
    "6f54206f614d796e 5320636565727374 54206f6f4d206e61 2079655372637465"
    "20736f54206f614d 796e532063656572 737454206f6f4d20 6e61207965537263"
    "746520736f54206f 614d796e53206365 6572737454206f6f 4d206e6120796553"
    "7263746520736f54 206f614d796e5320 6365657273745420 6f6f4d206e610a79"
)
_DES3_EDE_CBC_CIPHERTEXT = h(
    "0e2db6973c5633f4 671721c76e8ad549 74b34905c51cd0ed 12565c5396b6007d"
    "9048fcf58d2939cc 8ad5351836234ed7 76d1da0c9467bb04 8bf2036ca8cfb6ea"
    "226447aa8f7513bf 9fc2c3f0c956c57a 71632e897b1e12ca e25fafd8a4f8c97a"
    "d6f92131624445a6 d6bc5ad32d5443cc 9ddea570e942458a 6bfab19113b0d919"
)

_DES3_EDE_CBC = (
    CipherVector(
        key=_DES3_EDE_CBC_KEY,
        iv=_DES3_EDE_CBC_IV,
        input=_DES3_EDE_CBC_PLAINTEXT,
        result=_DES3_EDE_CBC_CIPHERTEXT,
    ),
    CipherVector(
        key=_DES3_EDE_CBC_KEY,
        iv=_DES3_EDE_CBC_IV,
        input=_DES3_EDE_CBC_PLAINTEXT,
        result=_DES3_EDE_CBC_CIPHERTEXT,
        taps=(60, 40, 28),
    ),
)

_AES_FIPS197_PLAINTEXT = h("00112233445566778899aabbccddeeff")

_AES_ECB = (
    CipherVector(
        key=bytes(range(16)),
        input=_AES_FIPS197_PLAINTEXT,
        result=h("69c4e0d86a7b0430d8cdb78070b4c55a"),
    ),
    CipherVector(
        key=bytes(range(24)),
        input=_AES_FIPS197_PLAINTEXT,
        result=h("dda97ca4864cdfe06eaf70a0ec0d7191"),
    ),
    CipherVector(
        key=bytes(range(32)),
        input=_AES_FIPS197_PLAINTEXT,
        result=h("8ea2b7ca516745bfeafc49904b496089"),
    ),
)

# 160-bit keys are not an AES key size.
_AES_ECB_BAD_KEY = CipherVector(
    key=bytes(range(20)),
    input=_AES_FIPS197_PLAINTEXT,
    result=bytes(16),
    fail=True,
)

_AES_CBC = (
    CipherVector(
        key=h("06a9214036b8a15b512e03d534120006"),
        iv=h("3dafba429d9eb430b422da802c9fac41"),
        input=b"Single block msg",
        result=h("e353779c1079aeb82708942dbe77181a"),
    ),
    CipherVector(
        key=h("c286696d887c9aa0611bbb3e2025a45a"),
        iv=h("562e17996d093d28ddb3ba695a2e6f58"),
        input=bytes(range(32)),
        result=h(
            "d296cd94c2cccf8a3a863028b5e1dc0a"
            "7586602d253cfff91b8266bea6d61ab1"
        ),
    ),
    CipherVector(
        key=_AES_192_KEY,
        iv=_SP800_38A_CBC_IV,
        input=_SP800_38A_PLAINTEXT,
        result=h(
            "4f021db243bc633d7178183a9fa071e8"
            "b4d9ada9ad7dedf4e5e738763f69145a"
            "571b242012fb7ae07fa9baac3df102e0"
            "08b0e27988598881d920a9e64f5615cd"
        ),
    ),
    CipherVector(
        key=_AES_256_KEY,
        iv=_SP800_38A_CBC_IV,
        input=_SP800_38A_PLAINTEXT,
        result=h(
            "f58c4c04d6e5f1ba779eabfb5f7bfbd6"
            "9cfc4e967edb808d679f777bc6702c7d"
            "39f23369a9d9bacfa530e26304231461"
            "b2eb05e2c39be9fcda6c19078c6a9d1b"
        ),
    ),
)

_AES_CTR = (
    CipherVector(
        key=h("2b7e151628aed2a6abf7158809cf4f3c"),
        iv=_SP800_38A_CTR_IV,
        input=_SP800_38A_PLAINTEXT,
        result=h(
            "874d6191b620e3261bef6864990db6ce"
            "9806f66b7970fdff8617187bb9fffdff"
            "5ae4df3edbd5d35e5b4f09020db03eab"
            "1e031dda2fbe03d1792170a0f3009cee"
        ),
    ),
    CipherVector(
        key=_AES_192_KEY,
        iv=_SP800_38A_CTR_IV,
        input=_SP800_38A_PLAINTEXT,
        result=h(
            "1abc932417521ca24f2b0459fe7e6e0b"
            "090339ec0aa6faefd5ccc2c6f4ce8e94"
            "1e36b26bd1ebc670d1bd1d665620abf7"
            "4f78a7f6d29809585a97daec58c6b050"
        ),
    ),
    CipherVector(
        key=_AES_256_KEY,
        iv=_SP800_38A_CTR_IV,
        input=_SP800_38A_PLAINTEXT,
        result=h(
            "601ec313775789a5b7a7f504bbf3d228"
            "f443e3ca4d62b59aca84e990cacaf5c5"
            "2b0930daa23de94ce87017ba2d84988d"
            "dfc9c58db67aada613c2dd08457941a6"
        ),
    ),
)

DES3_EDE_ENC = _DES3_EDE + (_DES3_EDE_WEAK,)
DES3_EDE_DEC = _decrypting(_DES3_EDE) + (_DES3_EDE_WEAK,)

DES3_EDE_CBC_ENC = _DES3_EDE_CBC
DES3_EDE_CBC_DEC = _decrypting(_DES3_EDE_CBC)

AES_ENC = _AES_ECB + (_AES_ECB_BAD_KEY,)
AES_DEC = _decrypting(_AES_ECB) + (_AES_ECB_BAD_KEY,)

# The 192-bit SP800-38A vector again, split so a block straddles two pages.
AES_CBC_ENC = _AES_CBC + (replace(_AES_CBC[2], taps=(31, 33)),)
AES_CBC_DEC = _decrypting(AES_CBC_ENC)

AES_CTR_ENC = _AES_CTR + (replace(_AES_CTR[0], taps=(13, 51)),)
AES_CTR_DEC = _decrypting(AES_CTR_ENC)
