from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from ..bridge import Bridge
from ..errors import AllocationFailedError, HarnessError, OperationFailedError
from ..faults import NO_FAULTS, FaultPolicy
from ..interfaces import ProviderError, Request, Status, TransformProvider
from ..scratch import ScratchPool

log = logging.getLogger(__name__)


@dataclass
class RunContext:
    """Everything a category runner needs besides the registry entry."""

    provider: TransformProvider
    bridge: Bridge = field(default_factory=Bridge)
    pool: ScratchPool = field(default_factory=ScratchPool)
    faults: FaultPolicy = NO_FAULTS

    def allocate(self, driver: str, flags: int, category: str) -> Any:
        try:
            return self.provider.allocate(driver, flags)
        except (LookupError, ProviderError) as exc:
            log.error("%s: failed to load transform for %s: %s", category, driver, exc)
            raise AllocationFailedError(
                f"failed to load transform for {driver}: {exc}",
                driver=driver,
                category=category,
            ) from exc

    def call(self, what: str, request: Request, operation: Callable[[Request], Status]) -> Status:
        """Run one provider operation through the bridge."""
        try:
            return self.bridge.invoke(request, operation)
        except HarnessError:
            raise
        except ProviderError as exc:
            raise OperationFailedError(f"{what} failed: {exc}") from exc
        except Exception as exc:
            log.error("%s raised %s: %s", what, type(exc).__name__, exc)
            raise OperationFailedError(f"{what} failed: {type(exc).__name__}: {exc}") from exc


def hexdump(data: bytes, width: int = 16) -> str:
    lines = []
    for off in range(0, len(data), width):
        row = data[off:off + width]
        lines.append(f"{off:08x}: {' '.join(f'{b:02x}' for b in row)}")
    return "\n".join(lines)
