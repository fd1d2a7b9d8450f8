from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import (
    HarnessError,
    InvalidVectorError,
    ResetFailedError,
    ShortReadError,
    VectorMismatchError,
)
from ..interfaces import ProviderError, RngRequest
from .context import RunContext, hexdump

if TYPE_CHECKING:
    from ..registry import RegistryEntry

log = logging.getLogger(__name__)

CATEGORY = "rng"


def test_rng(ctx: RunContext, entry: "RegistryEntry", driver: str, flags: int = 0) -> None:
    """Reseed per vector, draw ``loops`` times, compare the last draw only."""
    provider = ctx.provider
    handle = ctx.allocate(driver, flags, CATEGORY)
    inject = ctx.faults.rng_fault(entry.fault_id)
    try:
        seed_size = provider.seed_size(handle)
        for i, v in enumerate(entry.suite.vectors):
            try:
                material = v.seed_material
                if len(material) > seed_size:
                    raise InvalidVectorError(
                        f"seed material of {len(material)} bytes exceeds seed size {seed_size}"
                    )
                seed = bytearray(seed_size)
                seed[:len(material)] = material

                try:
                    provider.rng_reset(handle, bytes(seed))
                except ProviderError as exc:
                    log.error("cprng: Failed to reset rng for %s: %s", driver, exc)
                    raise ResetFailedError(f"reset failed: {exc}") from exc

                wanted = len(v.result)
                req = RngRequest(wanted)
                for _ in range(v.loops):
                    ctx.call("get_bytes", req, lambda r: provider.rng_get_bytes(handle, r))
                    if len(req.output) < wanted:
                        log.error(
                            "cprng: Failed to obtain the correct amount of random data "
                            "(requested %d, got %d)", wanted, len(req.output),
                        )
                        raise ShortReadError(
                            f"requested {wanted} bytes, got {len(req.output)}"
                        )

                result = bytearray(req.output[:wanted])
                if inject:
                    log.warning("cprng: injecting fault into test %d for %s", i, driver)
                    result[0] ^= 0xFF
                if bytes(result) != v.result:
                    log.error(
                        "cprng: Test %d failed for %s\n%s", i, driver, hexdump(bytes(result))
                    )
                    raise VectorMismatchError(f"output mismatch for test {i}")
            except HarnessError as exc:
                exc.locate(algorithm=entry.name, driver=driver, category=CATEGORY, index=i)
                raise
    finally:
        provider.free(handle)
