from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence

from ..errors import (
    HarnessError,
    InvalidVectorError,
    KeySetupMismatchError,
    VectorMismatchError,
)
from ..faults import ALL_KEY_LENGTHS
from ..interfaces import CipherRequest, ProviderError, TransformFlags
from ..scatter import check_overrun, scatter
from ..scratch import PAGE_SIZE, ScratchArena
from ..vectors.schema import CipherVector
from .context import RunContext, hexdump

if TYPE_CHECKING:
    from ..registry import RegistryEntry

"""Block cipher known-answer runner.

Encryption and decryption tables are run in turn, each with a contiguous
pass (input at the start of page 0) and a chunked pass (input scattered with
a zeroed guard byte after every chunk). All operations are in place.
"""

log = logging.getLogger(__name__)

CATEGORY = "cipher"

ENCRYPT = "encryption"
DECRYPT = "decryption"


def test_cipher(ctx: RunContext, entry: "RegistryEntry", driver: str, flags: int = 0) -> None:
    handle = ctx.allocate(driver, flags, CATEGORY)
    suite = entry.suite
    fault_bits = ctx.faults.cipher_fault(entry.fault_id, driver)
    try:
        with ctx.pool.pages() as arena:
            for direction, vectors in ((ENCRYPT, suite.encrypt), (DECRYPT, suite.decrypt)):
                if not vectors:
                    continue
                _run_direction(ctx, arena, handle, entry, driver, direction, vectors, fault_bits)
    finally:
        ctx.provider.free(handle)


def _run_direction(
    ctx: RunContext,
    arena: ScratchArena,
    handle: Any,
    entry: "RegistryEntry",
    driver: str,
    direction: str,
    vectors: Sequence[CipherVector],
    fault_bits: Optional[int],
) -> None:
    provider = ctx.provider
    operation = provider.encrypt if direction == ENCRYPT else provider.decrypt

    def _op(r: CipherRequest) -> Any:
        return operation(handle, r)

    where = dict(algorithm=entry.name, driver=driver, category=CATEGORY, direction=direction)

    for i, v in enumerate(vectors):
        if v.chunked:
            continue
        try:
            if len(v.input) > PAGE_SIZE:
                raise InvalidVectorError(f"input of {len(v.input)} bytes does not fit in a page")
            view = arena.write(0, 0, v.input)
            if not _set_key(ctx, handle, v, i, driver, direction):
                continue
            req = CipherRequest([view], [view], len(v.input), v.padded_iv())
            ctx.call(direction, req, _op)
            page = arena.page(0)
            if _inject(fault_bits, v):
                log.warning("cipher: injecting fault into %s test %d for %s", direction, i, driver)
                page[0] ^= 0xFF
            got = bytes(page[:len(v.result)])
            if got != v.result:
                log.error(
                    "cipher: Test %d failed on %s for %s\n%s", i, direction, driver, hexdump(got)
                )
                raise VectorMismatchError(f"{direction} mismatch for test {i}")
        except HarnessError as exc:
            exc.locate(index=i, **where)
            raise

    for i, v in enumerate(vectors):
        if not v.chunked:
            continue
        try:
            layout = scatter(arena, v.taps, v.input, guard=True)
            if not _set_key(ctx, handle, v, i, driver, direction):
                continue
            req = CipherRequest(layout.views, layout.views, len(v.input), v.padded_iv())
            ctx.call(direction, req, _op)
            if _inject(fault_bits, v):
                log.warning(
                    "cipher: injecting fault into chunked %s test %d for %s", direction, i, driver
                )
                layout.views[0][0] ^= 0xFF
            consumed = 0
            for k, chunk in enumerate(layout.chunks):
                got = layout.chunk_bytes(k)
                expected = v.result[consumed:consumed + chunk.length]
                if got != expected:
                    log.error(
                        "cipher: Chunk test %d failed on %s at chunk %d for %s\n%s",
                        i, direction, k, driver, hexdump(got),
                    )
                    raise VectorMismatchError(
                        f"chunked {direction} mismatch for test {i}", chunk=k
                    )
                consumed += chunk.length
            check_overrun(arena, layout)
        except HarnessError as exc:
            exc.locate(index=i, **where)
            raise


def _set_key(
    ctx: RunContext,
    handle: Any,
    v: CipherVector,
    index: int,
    driver: str,
    direction: str,
) -> bool:
    """Returns whether the key was accepted; raises if that was unexpected."""
    provider = ctx.provider
    provider.clear_flags(handle)
    if v.weak_key:
        provider.set_flags(handle, TransformFlags.REQ_WEAK_KEY)
    try:
        provider.set_key(handle, v.key[:v.key_size])
        accepted = True
    except ProviderError as exc:
        log.debug("cipher: key for %s test %d rejected: %s", direction, index, exc)
        accepted = False
    if accepted == v.fail:
        log.error(
            "cipher: setkey %s on test %d for %s", "accepted" if v.fail else "refused", index, driver
        )
        expectation = "rejected" if v.fail else "accepted"
        raise KeySetupMismatchError(f"key should have been {expectation}")
    return accepted


def _inject(fault_bits: Optional[int], v: CipherVector) -> bool:
    if fault_bits is None:
        return False
    return fault_bits == ALL_KEY_LENGTHS or fault_bits == v.key_size * 8
