from __future__ import annotations

import importlib
import importlib.util
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .faults import NO_FAULTS, FaultPolicy
from .interfaces import ProviderError, TransformFlags

"""Environment-driven harness configuration.

CRYPTOKAT_PROVIDER      module path or .py file exposing ``Provider``/``provider``
CRYPTOKAT_FAULT_INJECT  comma list of fault ids and ``driver:bits`` overrides
CRYPTOKAT_ASYNC         truthy to ask the provider for deferred completion
CRYPTOKAT_LOG_LEVEL     logging level name for the CLI
"""

DEFAULT_PROVIDER = "cryptokat_pyca"
DEFAULT_LOG_LEVEL = "WARNING"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"", "0", "false", "no", "off"}


def _flag(name: str, raw: Optional[str]) -> bool:
    value = (raw or "").strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _level(raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"unknown log level {raw!r}")
    return level


@dataclass
class HarnessConfig:
    provider: str = DEFAULT_PROVIDER
    faults: FaultPolicy = NO_FAULTS
    use_async: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def flags(self) -> int:
        return int(TransformFlags.ASYNC if self.use_async else TransformFlags.NONE)


def load_config() -> HarnessConfig:
    """Read the CRYPTOKAT_* environment; invalid values raise ``ValueError``."""
    return HarnessConfig(
        provider=os.getenv("CRYPTOKAT_PROVIDER") or DEFAULT_PROVIDER,
        faults=FaultPolicy.parse(os.getenv("CRYPTOKAT_FAULT_INJECT")),
        use_async=_flag("CRYPTOKAT_ASYNC", os.getenv("CRYPTOKAT_ASYNC")),
        log_level=_level(os.getenv("CRYPTOKAT_LOG_LEVEL") or DEFAULT_LOG_LEVEL),
    )


def load_provider(module_path: str) -> Any:
    """Load a transform provider from a file path or module path."""
    p = Path(module_path)
    if p.suffix == ".py" and p.exists():
        spec = importlib.util.spec_from_file_location("cryptokat_user_provider", str(p))
        if spec is None or spec.loader is None:
            raise ProviderError(f"cannot load provider from {module_path}")
        mod = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(mod)
    else:
        mod = importlib.import_module(module_path)
    prov = getattr(mod, "Provider", None)
    if prov is not None:
        return prov()
    prov = getattr(mod, "provider", None)
    if prov is None:
        raise ProviderError(f"no Provider class or provider object in {module_path}")
    return prov
