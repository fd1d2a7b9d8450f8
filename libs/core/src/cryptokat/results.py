from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import List, Optional

"""Result containers returned by the dispatcher.

A run resolves up to two registry entries (driver name and algorithm name);
each produces one :class:`EntryResult`. The overall outcome is the logical
OR of the entry failures.
"""


class Outcome(enum.IntEnum):
    PASSED = 0
    FAILED = 1
    NO_TEST = 2

    @property
    def ok(self) -> bool:
        return self is not Outcome.FAILED

    @property
    def exit_code(self) -> int:
        return 1 if self is Outcome.FAILED else 0


@dataclass
class EntryResult:
    entry: str
    category: str
    vectors: int
    error: Optional[BaseException] = None

    @property
    def passed(self) -> bool:
        return self.error is None


@dataclass
class RunReport:
    driver: str
    algorithm: Optional[str]
    entries: List[EntryResult] = field(default_factory=list)

    @property
    def outcome(self) -> Outcome:
        if not self.entries:
            return Outcome.NO_TEST
        failed = False
        for r in self.entries:
            failed |= not r.passed
        return Outcome.FAILED if failed else Outcome.PASSED

    @property
    def errors(self) -> List[BaseException]:
        return [r.error for r in self.entries if r.error is not None]
