
from __future__ import annotations
import enum
from concurrent.futures import Future, InvalidStateError
from typing import Any, List, Protocol, Union

"""Transform provider contract used by the runners.

Providers implement :class:`TransformProvider` and hand out opaque handles
from ``allocate``. The harness never looks inside a handle; it only passes it
back together with one of the request objects defined here. Data operations
may finish immediately or report ``IN_PROGRESS``/``BUSY`` and finish later by
calling ``request.complete`` from another thread.
"""

MAX_IV_SIZE = 16


class Status(enum.Enum):
    OK = "ok"
    IN_PROGRESS = "in-progress"
    BUSY = "busy"  # accepted into the backlog


class TransformFlags(enum.IntFlag):
    NONE = 0
    ASYNC = 0x1
    REQ_WEAK_KEY = 0x100


class ProviderError(RuntimeError):
    pass


class KeyRejected(ProviderError):
    """Raised by ``set_key`` when the transform refuses a key."""


class Request:
    """Base request: carries the one-shot completion for deferred results."""

    def __init__(self) -> None:
        self._completion: Future = Future()

    def complete(self, outcome: Union[Status, BaseException] = Status.OK) -> None:
        # Backlogged request moved onto the queue; the real result follows.
        if outcome is Status.IN_PROGRESS:
            return
        try:
            if isinstance(outcome, BaseException):
                self._completion.set_exception(outcome)
            else:
                self._completion.set_result(outcome)
        except InvalidStateError:
            # waiter gave up (cancelled) before the provider finished
            pass

    def wait(self) -> Status:
        return self._completion.result()

    def cancel(self) -> bool:
        return self._completion.cancel()

    def reset(self) -> None:
        self._completion = Future()

    @property
    def done(self) -> bool:
        return self._completion.done()


class HashRequest(Request):
    def __init__(self, src: List[memoryview], nbytes: int, result: bytearray) -> None:
        super().__init__()
        self.src = src
        self.nbytes = nbytes
        self.result = result
        self.state: Any = None  # provider-owned between init and final


class CipherRequest(Request):
    """In-place when ``dst`` is ``src`` (the harness always does this)."""

    def __init__(
        self,
        src: List[memoryview],
        dst: List[memoryview],
        nbytes: int,
        iv: bytearray,
    ) -> None:
        super().__init__()
        self.src = src
        self.dst = dst
        self.nbytes = nbytes
        self.iv = iv


class RngRequest(Request):
    def __init__(self, count: int) -> None:
        super().__init__()
        self.count = count
        self.output: bytes = b""


class TransformProvider(Protocol):
    """Capability interface the harness drives."""

    def allocate(self, name: str, flags: int = 0) -> Any: ...
    def free(self, handle: Any) -> None: ...

    def set_flags(self, handle: Any, flags: int) -> None: ...
    def clear_flags(self, handle: Any) -> None: ...
    def set_key(self, handle: Any, key: bytes) -> None: ...

    def digest_size(self, handle: Any) -> int: ...
    def digest_init(self, handle: Any, request: HashRequest) -> Status: ...
    def digest_update(self, handle: Any, request: HashRequest) -> Status: ...
    def digest_final(self, handle: Any, request: HashRequest) -> Status: ...
    def digest(self, handle: Any, request: HashRequest) -> Status: ...

    def encrypt(self, handle: Any, request: CipherRequest) -> Status: ...
    def decrypt(self, handle: Any, request: CipherRequest) -> Status: ...

    def seed_size(self, handle: Any) -> int: ...
    def rng_reset(self, handle: Any, seed: bytes) -> None: ...
    def rng_get_bytes(self, handle: Any, request: RngRequest) -> Status: ...


__all__ = [
    "CipherRequest",
    "HashRequest",
    "KeyRejected",
    "MAX_IV_SIZE",
    "ProviderError",
    "Request",
    "RngRequest",
    "Status",
    "TransformFlags",
    "TransformProvider",
]
