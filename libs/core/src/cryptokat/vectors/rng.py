"""ANSI X9.31 CPRNG (AES-128) vectors from NIST RNGVS appendix B.2.9/B.2.10."""
from __future__ import annotations

from .schema import RngVector, h

_VST_KEY = h("f3b1666d13607242ed061cabb8d46202")

ANSI_CPRNG = (
    RngVector(
        key=_VST_KEY,
        dt=h("e6b3be782a23fa62d71d4afbb0e922f9"),
        v=h("80000000000000000000000000000000"),
        result=h("59531ed13bb0c05584796685c12f7641"),
    ),
    RngVector(
        key=_VST_KEY,
        dt=h("e6b3be782a23fa62d71d4afbb0e922fa"),
        v=h("c0000000000000000000000000000000"),
        result=h("7c222cf4ca8fa24c1c9cb641a9f3220d"),
    ),
    RngVector(
        key=_VST_KEY,
        dt=h("e6b3be782a23fa62d71d4afbb0e922fb"),
        v=h("e0000000000000000000000000000000"),
        result=h("8aaa003966675be529142881a94d4ec7"),
    ),
    RngVector(
        key=_VST_KEY,
        dt=h("e6b3be782a23fa62d71d4afbb0e922fc"),
        v=h("f0000000000000000000000000000000"),
        result=h("88dda456302423e5f69da57e7b95c73a"),
    ),
    RngVector(
        key=_VST_KEY,
        dt=h("e6b3be782a23fa62d71d4afbb0e922fd"),
        v=h("f8000000000000000000000000000000"),
        result=h("052592466179d2cb78c40b140a5a9ac8"),
    ),
    # Monte Carlo: only the output of the last of the 10000 draws is checked.
    RngVector(
        key=h("9f5b51200bf334b5d82be8c37255c848"),
        dt=h("6376bbe52902ba3b67c925fa701f11ac"),
        v=h("572c8e76872647977e74fbddc49501d1"),
        result=h("48e9bd0d06ee18fbe45790d5c3fc9b73"),
        loops=10000,
    ),
)
