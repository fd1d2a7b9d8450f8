from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Any, Callable, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
CLI_SRC = ROOT / "apps" / "cli" / "src"
CORE_SRC = ROOT / "libs" / "core" / "src"
PYCA_SRC = ROOT / "libs" / "adapters" / "pyca" / "src"

for candidate in (CLI_SRC, CORE_SRC, PYCA_SRC):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from cryptokat.interfaces import Status  # noqa: E402
from cryptokat.runners import RunContext  # noqa: E402
from cryptokat_pyca import Provider  # noqa: E402

ENV_VARS = ("CRYPTOKAT_PROVIDER", "CRYPTOKAT_FAULT_INJECT", "CRYPTOKAT_ASYNC", "CRYPTOKAT_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def provider():
    prov = Provider()
    try:
        yield prov
    finally:
        prov.close()


@pytest.fixture
def ctx(provider) -> RunContext:
    return RunContext(provider=provider)


class RecordingAllocator:
    """Page allocator that keeps every page it hands out, in order."""

    def __init__(self) -> None:
        self.pages: List[bytearray] = []

    def __call__(self, size: int) -> bytearray:
        page = bytearray(size)
        self.pages.append(page)
        return page


@pytest.fixture
def recording_allocator() -> RecordingAllocator:
    return RecordingAllocator()


class WrappedProvider:
    """Delegates to a real provider; individual calls can be overridden.

    ``after`` hooks run after the delegated call with the same arguments,
    which lets a test corrupt results the way a buggy transform would.
    """

    def __init__(self, inner: Any) -> None:
        self.inner = inner
        self.allocated = 0
        self.freed = 0
        self.after: dict = {}

    def allocate(self, name: str, flags: int = 0) -> Any:
        handle = self.inner.allocate(name, flags)
        self.allocated += 1
        return handle

    def free(self, handle: Any) -> None:
        self.freed += 1
        self.inner.free(handle)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        target = getattr(self.inner, name)
        hook = self.after.get(name)
        if hook is None:
            return target

        def _call(*args: Any) -> Any:
            out = target(*args)
            replaced = hook(*args)
            return out if replaced is None else replaced

        return _call


@pytest.fixture
def wrapped(provider) -> WrappedProvider:
    return WrappedProvider(provider)


def complete_later(request: Any, *outcomes: Any, delay: float = 0.01) -> threading.Thread:
    """Deliver ``outcomes`` to ``request.complete`` from another thread."""

    def _run() -> None:
        for outcome in outcomes:
            threading.Event().wait(delay)
            request.complete(outcome)

    t = threading.Thread(target=_run, daemon=True)
    t.start()
    return t


__all__ = ["RecordingAllocator", "Status", "WrappedProvider", "complete_later"]
