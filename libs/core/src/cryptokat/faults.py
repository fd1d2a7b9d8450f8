from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

log = logging.getLogger(__name__)

#: Cipher fault applies whatever the vector's key length.
ALL_KEY_LENGTHS = -1


@dataclass(frozen=True)
class FaultPolicy:
    """Which runs get synthetic corruption injected before comparison.

    ``algorithms`` holds registry fault ids; every vector of a matching
    entry is corrupted. ``key_lengths`` maps a cipher driver name to a key
    size in bits; only vectors with that key length are corrupted, and the
    override wins over the fault-id match for that driver.
    """

    algorithms: FrozenSet[str] = frozenset()
    key_lengths: Mapping[str, int] = field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        return bool(self.algorithms or self.key_lengths)

    def hash_fault(self, fault_id: Optional[str]) -> bool:
        return fault_id is not None and fault_id in self.algorithms

    rng_fault = hash_fault

    def cipher_fault(self, fault_id: Optional[str], driver: str) -> Optional[int]:
        """``None`` (off), :data:`ALL_KEY_LENGTHS`, or a key size in bits."""
        if driver in self.key_lengths:
            return self.key_lengths[driver]
        if fault_id is not None and fault_id in self.algorithms:
            return ALL_KEY_LENGTHS
        return None

    @classmethod
    def parse(cls, spec: Optional[str]) -> "FaultPolicy":
        """Parse ``"sha1,cbc-aes-pyca:128"`` style selections.

        A bare item is a fault id; ``name:bits`` is a key-length override.
        Empty or missing input disables injection.
        """
        if not spec:
            return cls()
        algorithms = set()
        key_lengths = {}
        for raw in spec.split(","):
            item = raw.strip()
            if not item:
                continue
            if ":" in item:
                name, _, bits = item.rpartition(":")
                try:
                    key_lengths[name.strip()] = int(bits)
                except ValueError as exc:
                    raise ValueError(f"bad key length in fault selection {item!r}") from exc
            else:
                algorithms.add(item)
        policy = cls(frozenset(algorithms), key_lengths)
        if policy.enabled:
            log.warning("fault injection armed: %s", spec)
        return policy


NO_FAULTS = FaultPolicy()
