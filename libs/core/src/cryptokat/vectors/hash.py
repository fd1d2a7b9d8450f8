"""Hash and HMAC known-answer vectors.

SHA vectors are from FIPS 180-1/180-2 and NIST (the 163-byte SHA-1 message
is from CAVS 5.0); HMAC-SHA1 from RFC 2202, HMAC-SHA224/384/512 from
RFC 4231 and HMAC-SHA256 from draft-ietf-ipsec-ciph-sha-256-01.
"""
from __future__ import annotations

from .schema import HashVector, h

_ABC = b"abc"
_448_BITS = b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq"
_896_BITS = (
    b"abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmn"
    b"hijklmnoijklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu"
)
_ALPHABET_X4 = b"abcdefghijklmnopqrstuvwxyz" * 4

_HI_THERE = b"Hi There"
_JEFE = b"Jefe"
_WHAT_DO_YA_WANT = b"what do ya want for nothing?"
_TRUNCATION = b"Test With Truncation"
_KEY_FIRST = b"Test Using Larger Than Block-Size Key - Hash Key First"
_LARGER_DATA = b"Test Using Larger Than Block-Size Key and Larger Than One Block-Size Data"
_RFC4231_LONG = (
    b"This is a test using a larger than block-size key and a larger than "
    b"block-size data. The key needs to be hashed before being used by the "
    b"HMAC algorithm."
)
_KEY_01_TO_20 = bytes(range(0x01, 0x21))

SHA1 = (
    HashVector(
        plaintext=_ABC,
        digest=h("a9993e364706816aba3e25717850c26c9cd0d89d"),
    ),
    HashVector(
        plaintext=_448_BITS,
        digest=h("84983e441c3bd26ebaae4aa1f95129e5e54670f1"),
        taps=(28, 28),
    ),
    HashVector(
        plaintext=h(
            "ec29561244ede706 b6eb30a1c371d744 50a105c3f9735f7f a9fe38cf67f304a5"
            "736a106e92e17139 a6813b1c81a4f3d3 fb9546ab4296fa9f 722826c066869eda"
            "cd73b25480351858 13e22634a9da4400 0d95a281ff9f264e cce0a931222162d0"
            "21cca28db5f3c2aa 24945ab1e31cb413 ae29810fd794cad5 dfaf29ec43cb38d1"
            "98fe4ae1da235978 0221405bd6712a53 05da4b1b737fce7c d21c0eb7728d0823"
            "5a9011"
        ),
        digest=h("970111c4e77bcc88cc20459c02b69b4aa8f58217"),
        taps=(63, 64, 31, 5),
    ),
)

SHA224 = (
    HashVector(
        plaintext=_ABC,
        digest=h("23097d223405d8228642a477bda255b32aadbce4bda0b3f7e36c9da7"),
    ),
    HashVector(
        plaintext=_448_BITS,
        digest=h("75388b16512776cc5dba5da1fd890150b0c6455cb4f58b1952522525"),
        taps=(28, 28),
    ),
)

SHA256 = (
    HashVector(
        plaintext=_ABC,
        digest=h("ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
    ),
    HashVector(
        plaintext=_448_BITS,
        digest=h("248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"),
        taps=(28, 28),
    ),
)

SHA384 = (
    HashVector(
        plaintext=_ABC,
        digest=h(
            "cb00753f45a35e8bb5a03d699ac65007272c32ab0eded163"
            "1a8b605a43ff5bed8086072ba1e7cc2358baeca134c825a7"
        ),
    ),
    HashVector(
        plaintext=_448_BITS,
        digest=h(
            "3391fdddfc8dc7393707a65b1b4709397cf8b1d162af05ab"
            "fe8f450de5f36bc6b0455a8520bc4e6f5fe95b1fe3c8452b"
        ),
    ),
    HashVector(
        plaintext=_896_BITS,
        digest=h(
            "09330c33f71147e83d192fc782cd1b4753111b173b3b05d2"
            "2fa08086e3b0f712fcc7c71a557e2db966c3e9fa91746039"
        ),
    ),
    HashVector(
        plaintext=_ALPHABET_X4,
        digest=h(
            "3d208973ab3508dbbd7e2c2862ba290ad3010e4978c198dc"
            "4d8fd014e582823a89e16f9b2a7bbc1ac938e2d199e8bea4"
        ),
        taps=(26, 26, 26, 26),
    ),
)

SHA512 = (
    HashVector(
        plaintext=_ABC,
        digest=h(
            "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
            "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f"
        ),
    ),
    HashVector(
        plaintext=_448_BITS,
        digest=h(
            "204a8fc6dda82f0a0ced7beb8e08a41657c16ef468b228a8279be331a703c335"
            "96fd15c13b1b07f9aa1d3bea57789ca031ad85c7a71dd70354ec631238ca3445"
        ),
    ),
    HashVector(
        plaintext=_896_BITS,
        digest=h(
            "8e959b75dae313da8cf4f72814fc143f8f7779c6eb9f7fa17299aeadb6889018"
            "501d289e4900f7e4331b99dec4b5433ac7d329eeb6dd26545e96e55b874be909"
        ),
    ),
    HashVector(
        plaintext=_ALPHABET_X4,
        digest=h(
            "930d0cefcb30ff1133b6898121f1cf3d27578afcafe8677c5257cf069911f75d"
            "8f5831b56ebfda67b278e66dff8b84fe2b2870f742a580d8edb41987232850c9"
        ),
        taps=(26, 26, 26, 26),
    ),
)

HMAC_SHA1 = (
    HashVector(
        key=b"\x0b" * 20,
        plaintext=_HI_THERE,
        digest=h("b617318655057264e28bc0b6fb378c8ef146be00"),
    ),
    HashVector(
        key=_JEFE,
        plaintext=_WHAT_DO_YA_WANT,
        digest=h("effcdf6ae5eb2fa2d27416d5f184df9c259a7c79"),
        taps=(14, 14),
    ),
    HashVector(
        key=b"\xaa" * 20,
        plaintext=b"\xdd" * 50,
        digest=h("125d7342b9ac11cd91a39af48aa17b4f63f175d3"),
    ),
    HashVector(
        key=bytes(range(0x01, 0x1a)),
        plaintext=b"\xcd" * 50,
        digest=h("4c9007f4026250c6bc8414f9bf50c86c2d7235da"),
    ),
    HashVector(
        key=b"\x0c" * 20,
        plaintext=_TRUNCATION,
        digest=h("4c1a03424b55e07fe7f27be1d58bb9324a9a5a04"),
    ),
    HashVector(
        key=b"\xaa" * 80,
        plaintext=_KEY_FIRST,
        digest=h("aa4ae5e15272d00e95705637ce8a3b55ed402112"),
    ),
    HashVector(
        key=b"\xaa" * 80,
        plaintext=_LARGER_DATA,
        digest=h("e8e99d0f45237d786d6bbaa7965c7808bbff1a91"),
    ),
)

HMAC_SHA224 = (
    HashVector(
        key=b"\x0b" * 20,
        plaintext=_HI_THERE,
        digest=h("896fb1128abbdf196832107cd49df33f47b4b1169912ba4f53684b22"),
    ),
    HashVector(
        key=_JEFE,
        plaintext=_WHAT_DO_YA_WANT,
        digest=h("a30e01098bc6dbbf45690f3a7e9e6d0f8bbea2a39e6148008fd05e44"),
        taps=(7, 7, 7, 7),
    ),
    HashVector(
        key=b"\xaa" * 131,
        plaintext=_KEY_FIRST,
        digest=h("95e9a0db962095adaebe9b2d6f0dbce2d499f112f2d2b7273fa6870e"),
    ),
    HashVector(
        key=b"\xaa" * 131,
        plaintext=_RFC4231_LONG,
        digest=h("3a854166ac5d9f023f54d517d0b39dbd946770db9c2b95c9f6f565d1"),
    ),
)

HMAC_SHA256 = (
    HashVector(
        key=_KEY_01_TO_20,
        plaintext=_ABC,
        digest=h("a21b1f5d4cf4f73a4dd939750f7a066a7f98cc131cb16a6692759021cfab8181"),
    ),
    HashVector(
        key=_KEY_01_TO_20,
        plaintext=_448_BITS,
        digest=h("104fdc1257328f08184ba73131c53caee698e36119421149ea8c712456697d30"),
    ),
    HashVector(
        key=_KEY_01_TO_20,
        plaintext=_448_BITS * 2,
        digest=h("470305fc7e40fe34d3eeb3e773d95aab73acf0fd060447a5eb4595bf33a9d1a3"),
    ),
    HashVector(
        key=b"\x0b" * 32,
        plaintext=_HI_THERE,
        digest=h("198a607eb44bfbc69903a0f1cf2bbdc5ba0aa3f3d9ae3c1c7a3b1696a0b68cf7"),
    ),
    HashVector(
        key=_JEFE,
        plaintext=_WHAT_DO_YA_WANT,
        digest=h("5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"),
        taps=(14, 14),
    ),
    HashVector(
        key=b"\xaa" * 32,
        plaintext=b"\xdd" * 50,
        digest=h("cdcb1220d1ecccea91e53aba3092f962e549fe6ce9ed7fdc43191fbde45c30b0"),
    ),
    HashVector(
        key=bytes(range(0x01, 0x26)),
        plaintext=b"\xcd" * 50,
        digest=h("d4633c17f6fb8d744c66dee0f8f074556ec4af55ef07998541468eb49bd2e917"),
    ),
    HashVector(
        key=b"\x0c" * 32,
        plaintext=_TRUNCATION,
        digest=h("7546af01841fc09b1ab9c3749a5f1c17d4f589668a587b2700a9c97c1193cf42"),
    ),
    HashVector(
        key=b"\xaa" * 80,
        plaintext=_KEY_FIRST,
        digest=h("6953025ed96f0c09f80a96f78e6538dbe2e7b820e3dd970e7ddd39091b32352f"),
    ),
    HashVector(
        key=b"\xaa" * 80,
        plaintext=_LARGER_DATA,
        digest=h("6355ac22e890d0a3c8481a5ca4825bc884d3e7a1ff98a2fc2ac7d8e064c3b2e6"),
    ),
)

HMAC_SHA384 = (
    HashVector(
        key=b"\x0b" * 20,
        plaintext=_HI_THERE,
        digest=h(
            "afd03944d84895626b0825f4ab46907f15f9dadbe4101ec6"
            "82aa034c7cebc59cfaea9ea9076ede7f4af152e8b2fa9cb6"
        ),
    ),
    HashVector(
        key=_JEFE,
        plaintext=_WHAT_DO_YA_WANT,
        digest=h(
            "af45d2e376484031617f78d2b58a6b1b9c7ef464f5a01b47"
            "e42ec3736322445e8e2240ca5e69e2c78b3239ecfab21649"
        ),
        taps=(7, 7, 7, 7),
    ),
    HashVector(
        key=b"\xaa" * 131,
        plaintext=_KEY_FIRST,
        digest=h(
            "4ece084485813e9088d2c63a041bc5b44f9ef1012a2b588f"
            "3cd11f05033ac4c60c2ef6ab4030fe8296248df163f44952"
        ),
    ),
    HashVector(
        key=b"\xaa" * 131,
        plaintext=_RFC4231_LONG,
        digest=h(
            "6617178e941f020d351e2f254e8fd32c602420feb0b8fb9a"
            "dccebb82461e99c5a678cc31e799176d3860e6110c46523e"
        ),
    ),
)

HMAC_SHA512 = (
    HashVector(
        key=b"\x0b" * 20,
        plaintext=_HI_THERE,
        digest=h(
            "87aa7cdea5ef619d4ff0b4241a1d6cb02379f4e2ce4ec2787ad0b30545e17cde"
            "daa833b7d6b8a702038b274eaea3f4e4be9d914eeb61f1702e696c203a126854"
        ),
    ),
    HashVector(
        key=_JEFE,
        plaintext=_WHAT_DO_YA_WANT,
        digest=h(
            "164b7a7bfcf819e2e395fbe73b56e0a387bd64222e831fd610270cd7ea250554"
            "9758bf75c05a994a6d034f65f8f0e6fdcaeab1a34d4a6b4b636e070a38bce737"
        ),
        taps=(7, 7, 7, 7),
    ),
    HashVector(
        key=b"\xaa" * 131,
        plaintext=_KEY_FIRST,
        digest=h(
            "80b24263c7c1a3ebb71493c1dd7be8b49b46d1f41b4aeec1121b013783f8f352"
            "6b56d037e05f2598bd0fd2215d6a1e5295e64f73f63f0aec8b915a985d786598"
        ),
    ),
    HashVector(
        key=b"\xaa" * 131,
        plaintext=_RFC4231_LONG,
        digest=h(
            "e37b6a775dc87dbaa4dfa9f96e5e3ffddebd71f8867289865df5a32d20cdc944"
            "b6022cac3c4982b10d5eeb55c3e4de15134676fb6de0446065c97440fa8c6a58"
        ),
    ),
)
