from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cryptography.exceptions import AlreadyFinalized, UnsupportedAlgorithm

from cryptokat.interfaces import (
    CipherRequest,
    HashRequest,
    ProviderError,
    Request,
    RngRequest,
    Status,
    TransformFlags,
)

from ._registry import transforms
from ._util import gather, iter_segments, scatter_into

"""Transform provider backed by the ``cryptography`` package.

Handles are allocated by transform name (generic, e.g. ``cbc(aes)``, or
driver, e.g. ``cbc-aes-pyca``). With ``TransformFlags.ASYNC`` at allocation
time every data operation is queued to a single worker thread and reported
as ``IN_PROGRESS``; the worker completes the request when done.
"""

log = logging.getLogger(__name__)


@dataclass
class _Handle:
    name: str
    transform: Any
    flags: int = 0
    deferred: bool = False
    freed: bool = False


class Provider:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    # ------------------------------------------------------------ lifecycle
    def allocate(self, name: str, flags: int = 0) -> _Handle:
        cls = transforms.get(name)
        try:
            transform = cls()
        except UnsupportedAlgorithm as exc:
            raise ProviderError(f"{name}: backend does not support it: {exc}") from exc
        deferred = bool(flags & TransformFlags.ASYNC)
        log.debug("allocated %s (%s)", name, "deferred" if deferred else "immediate")
        return _Handle(name=name, transform=transform, deferred=deferred)

    def free(self, handle: _Handle) -> None:
        handle.freed = True

    def close(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def set_flags(self, handle: _Handle, flags: int) -> None:
        handle.flags |= int(flags)

    def clear_flags(self, handle: _Handle) -> None:
        handle.flags = 0

    def set_key(self, handle: _Handle, key: bytes) -> None:
        self._live(handle).set_key(bytes(key), handle.flags)

    # ------------------------------------------------------------ hash
    def digest_size(self, handle: _Handle) -> int:
        return self._live(handle, "hash").digest_size

    def digest_init(self, handle: _Handle, request: HashRequest) -> Status:
        t = self._live(handle, "hash")

        def _work() -> None:
            request.state = t.new()

        return self._submit(handle, request, _work)

    def digest_update(self, handle: _Handle, request: HashRequest) -> Status:
        self._live(handle, "hash")

        def _work() -> None:
            if request.state is None:
                raise ProviderError("update without init")
            for seg in iter_segments(request.src, request.nbytes):
                request.state.update(seg)

        return self._submit(handle, request, _work)

    def digest_final(self, handle: _Handle, request: HashRequest) -> Status:
        self._live(handle, "hash")

        def _work() -> None:
            if request.state is None:
                raise ProviderError("final without init")
            try:
                out = request.state.finalize()
            except AlreadyFinalized as exc:
                raise ProviderError("final called twice") from exc
            finally:
                request.state = None
            request.result[:len(out)] = out

        return self._submit(handle, request, _work)

    def digest(self, handle: _Handle, request: HashRequest) -> Status:
        t = self._live(handle, "hash")

        def _work() -> None:
            ctx = t.new()
            for seg in iter_segments(request.src, request.nbytes):
                ctx.update(seg)
            out = ctx.finalize()
            request.result[:len(out)] = out

        return self._submit(handle, request, _work)

    # ------------------------------------------------------------ cipher
    def encrypt(self, handle: _Handle, request: CipherRequest) -> Status:
        return self._crypt(handle, request, encrypt=True)

    def decrypt(self, handle: _Handle, request: CipherRequest) -> Status:
        return self._crypt(handle, request, encrypt=False)

    def _crypt(self, handle: _Handle, request: CipherRequest, encrypt: bool) -> Status:
        t = self._live(handle, "cipher")

        def _work() -> None:
            data = gather(request.src, request.nbytes)
            out, next_iv = t.crypt(data, bytes(request.iv), encrypt)
            scatter_into(request.dst, out)
            request.iv[:len(next_iv)] = next_iv

        return self._submit(handle, request, _work)

    # ------------------------------------------------------------ rng
    def seed_size(self, handle: _Handle) -> int:
        return self._live(handle, "rng").seed_size

    def rng_reset(self, handle: _Handle, seed: bytes) -> None:
        self._live(handle, "rng").reset(bytes(seed))

    def rng_get_bytes(self, handle: _Handle, request: RngRequest) -> Status:
        t = self._live(handle, "rng")

        def _work() -> None:
            request.output = t.get_bytes(request.count)

        return self._submit(handle, request, _work)

    # ------------------------------------------------------------ plumbing
    def _live(self, handle: _Handle, kind: Optional[str] = None) -> Any:
        if handle.freed:
            raise ProviderError(f"{handle.name}: handle used after free")
        if kind is not None and handle.transform.kind != kind:
            raise ProviderError(f"{handle.name} is a {handle.transform.kind} transform, not {kind}")
        return handle.transform

    def _pool(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="cryptokat-pyca"
                )
            return self._executor

    def _submit(self, handle: _Handle, request: Request, work: Callable[[], None]) -> Status:
        if not handle.deferred:
            work()
            return Status.OK

        def _job() -> None:
            try:
                work()
            except Exception as exc:
                request.complete(exc)
            else:
                request.complete(Status.OK)

        self._pool().submit(_job)
        return Status.IN_PROGRESS
