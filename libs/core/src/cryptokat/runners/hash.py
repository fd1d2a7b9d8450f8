"""Hash/HMAC known-answer runner.

The table is walked twice per invocation: once through the one-shot
``digest`` call and once through ``init``/``update``/``final``. Each walk
covers the contiguous vectors first, then the chunked ones; chunked vectors
always use the one-shot path.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..errors import HarnessError, InvalidVectorError, SetKeyFailedError, VectorMismatchError
from ..interfaces import HashRequest, ProviderError
from ..scatter import scatter
from ..scratch import PAGE_SIZE, ScratchArena
from ..vectors.schema import HashVector
from .context import RunContext, hexdump

if TYPE_CHECKING:
    from ..registry import RegistryEntry

log = logging.getLogger(__name__)

CATEGORY = "hash"

# Large enough for every supported digest (SHA-512).
RESULT_SIZE = 64


def test_hash(ctx: RunContext, entry: "RegistryEntry", driver: str, flags: int = 0) -> None:
    handle = ctx.allocate(driver, flags, CATEGORY)
    try:
        with ctx.pool.pages() as arena:
            for use_digest in (True, False):
                _run_table(ctx, arena, handle, entry, driver, use_digest)
    finally:
        ctx.provider.free(handle)


def _run_table(
    ctx: RunContext,
    arena: ScratchArena,
    handle: Any,
    entry: "RegistryEntry",
    driver: str,
    use_digest: bool,
) -> None:
    provider = ctx.provider
    digest_size = provider.digest_size(handle)
    inject = ctx.faults.hash_fault(entry.fault_id)
    vectors = entry.suite.vectors

    for i, v in enumerate(vectors):
        if v.chunked:
            continue
        try:
            if len(v.plaintext) > PAGE_SIZE:
                raise InvalidVectorError(
                    f"plaintext of {len(v.plaintext)} bytes does not fit in a page"
                )
            result = bytearray(max(RESULT_SIZE, digest_size))
            view = arena.write(0, 0, v.plaintext)
            _set_key(ctx, handle, v)
            req = HashRequest([view], len(v.plaintext), result)
            if use_digest:
                ctx.call("digest", req, lambda r: provider.digest(handle, r))
            else:
                ctx.call("init", req, lambda r: provider.digest_init(handle, r))
                ctx.call("update", req, lambda r: provider.digest_update(handle, r))
                ctx.call("final", req, lambda r: provider.digest_final(handle, r))
            _check(result, v, digest_size, inject, i, driver)
        except HarnessError as exc:
            exc.locate(algorithm=entry.name, driver=driver, category=CATEGORY, index=i)
            raise

    for i, v in enumerate(vectors):
        if not v.chunked:
            continue
        try:
            result = bytearray(max(RESULT_SIZE, digest_size))
            layout = scatter(arena, v.taps, v.plaintext)
            _set_key(ctx, handle, v)
            req = HashRequest(layout.views, layout.nbytes, result)
            ctx.call("digest", req, lambda r: provider.digest(handle, r))
            _check(result, v, digest_size, inject, i, driver)
        except HarnessError as exc:
            exc.locate(algorithm=entry.name, driver=driver, category=CATEGORY, index=i)
            raise


def _set_key(ctx: RunContext, handle: Any, v: HashVector) -> None:
    if not v.key:
        return
    ctx.provider.clear_flags(handle)
    try:
        ctx.provider.set_key(handle, v.key)
    except ProviderError as exc:
        raise SetKeyFailedError(f"setkey failed: {exc}") from exc


def _check(
    result: bytearray,
    v: HashVector,
    digest_size: int,
    inject: bool,
    index: int,
    driver: str,
) -> None:
    if inject:
        log.warning("hash: injecting fault into vector %d for %s", index, driver)
        result[0] ^= 0x01
    got = bytes(result[:digest_size])
    if got != v.digest[:digest_size]:
        log.error("hash: test %d failed for %s\n%s", index, driver, hexdump(got))
        raise VectorMismatchError(f"digest mismatch for test {index}")
