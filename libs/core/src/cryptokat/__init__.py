from .interfaces import (
    CipherRequest,
    HashRequest,
    KeyRejected,
    ProviderError,
    RngRequest,
    Status,
    TransformFlags,
    TransformProvider,
)
from .errors import HarnessError
from .faults import FaultPolicy, NO_FAULTS
from .registry import Registry, RegistryEntry, registry
from .results import EntryResult, Outcome, RunReport
from .runners import RunContext
from .dispatch import Dispatcher, run_conformance_test
from .config import HarnessConfig, load_config, load_provider

__all__ = [
    "CipherRequest",
    "HashRequest",
    "KeyRejected",
    "ProviderError",
    "RngRequest",
    "Status",
    "TransformFlags",
    "TransformProvider",
    "HarnessError",
    "FaultPolicy",
    "NO_FAULTS",
    "Registry",
    "RegistryEntry",
    "registry",
    "EntryResult",
    "Outcome",
    "RunReport",
    "RunContext",
    "Dispatcher",
    "run_conformance_test",
    "HarnessConfig",
    "load_config",
    "load_provider",
]
