from __future__ import annotations

import logging
from typing import Any, List, Optional

from .config import load_config, load_provider
from .errors import HarnessError, OperationFailedError, RunInterruptedError
from .faults import FaultPolicy
from .registry import Registry, RegistryEntry, registry
from .results import EntryResult, Outcome, RunReport
from .runners import RunContext

log = logging.getLogger(__name__)


class Dispatcher:
    """Resolves driver/algorithm names and runs the matching suites."""

    def __init__(self, ctx: RunContext, table: Registry = registry) -> None:
        self.ctx = ctx
        self.registry = table

    def run_test(self, driver: str, algorithm: Optional[str] = None, flags: int = 0) -> RunReport:
        """Run the suite registered under ``algorithm`` and then under ``driver``.

        Both names are looked up independently; when both resolve, both
        suites run (twice, if they are the same entry). Neither resolving is
        not a failure.
        """
        report = RunReport(driver=driver, algorithm=algorithm)
        alg_index = self.registry.find(algorithm) if algorithm else -1
        drv_index = self.registry.find(driver)

        if alg_index < 0 and drv_index < 0:
            log.info("No test for %s (%s)", algorithm or driver, driver)
            return report

        for index in (alg_index, drv_index):
            if index >= 0:
                report.entries.append(self._run_entry(self.registry[index], driver, flags))

        if report.outcome is Outcome.FAILED:
            log.error("self-tests for %s (%s) NOT passed", driver, algorithm or driver)
        else:
            log.info("self-tests for %s (%s) passed", driver, algorithm or driver)
        return report

    def run_all(self, flags: int = 0) -> List[RunReport]:
        """Every entry once, using its own name as the driver name."""
        return [self.run_test(entry.name, flags=flags) for entry in self.registry]

    def _run_entry(self, entry: RegistryEntry, driver: str, flags: int) -> EntryResult:
        result = EntryResult(entry=entry.name, category=entry.category, vectors=entry.vector_count)
        if not entry.vector_count:
            return result
        try:
            entry.run(self.ctx, driver, flags)
        except RunInterruptedError:
            raise
        except HarnessError as exc:
            log.error("alg: %s (%s): %s", entry.name, driver, exc)
            result.error = exc
        except Exception as exc:
            # provider raised outside any operation the runners wrap
            log.exception("alg: %s (%s): unexpected provider error", entry.name, driver)
            error = OperationFailedError(
                f"{type(exc).__name__}: {exc}",
                algorithm=entry.name,
                driver=driver,
                category=entry.category,
            )
            error.__cause__ = exc
            result.error = error
        return result


def run_conformance_test(
    driver: str,
    algorithm: Optional[str] = None,
    flags: int = 0,
    *,
    provider: Any = None,
    faults: Optional[FaultPolicy] = None,
) -> Outcome:
    """One-call entry point: configure from the environment where not given."""
    config = load_config()
    if provider is None:
        provider = load_provider(config.provider)
    if faults is None:
        faults = config.faults
    ctx = RunContext(provider=provider, faults=faults)
    report = Dispatcher(ctx).run_test(driver, algorithm, flags | config.flags)
    return report.outcome
