from __future__ import annotations

from typing import Optional


class HarnessError(RuntimeError):
    """Base for every failure a conformance run can report.

    The context fields locate the failing fixture: which algorithm entry,
    which driver was allocated, the category, the vector's position in its
    table and, for chunked cipher vectors, the chunk index.
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        driver: Optional[str] = None,
        category: Optional[str] = None,
        index: Optional[int] = None,
        chunk: Optional[int] = None,
        direction: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.algorithm = algorithm
        self.driver = driver
        self.category = category
        self.index = index
        self.chunk = chunk
        self.direction = direction

    def locate(self, **context: object) -> "HarnessError":
        """Fill in context fields that are still unset; returns ``self``."""
        for name, value in context.items():
            if getattr(self, name, None) is None:
                setattr(self, name, value)
        return self

    def __str__(self) -> str:
        parts = [self.message]
        where = []
        if self.category:
            where.append(self.category)
        if self.algorithm:
            where.append(f"alg={self.algorithm}")
        if self.driver and self.driver != self.algorithm:
            where.append(f"driver={self.driver}")
        if self.direction:
            where.append(self.direction)
        if self.index is not None:
            where.append(f"vector={self.index}")
        if self.chunk is not None:
            where.append(f"chunk={self.chunk}")
        if where:
            parts.append(f"[{' '.join(where)}]")
        return " ".join(parts)


class OutOfMemoryError(HarnessError):
    pass


class AllocationFailedError(HarnessError):
    pass


class SetKeyFailedError(HarnessError):
    pass


class KeySetupMismatchError(HarnessError):
    pass


class InvalidVectorError(HarnessError):
    """Malformed fixture data; never a transform fault."""


class VectorMismatchError(HarnessError):
    pass


class BufferOverrunError(HarnessError):
    pass


class RunInterruptedError(HarnessError):
    pass


class ShortReadError(HarnessError):
    pass


class ResetFailedError(HarnessError):
    pass


class OperationFailedError(HarnessError):
    pass


__all__ = [
    "AllocationFailedError",
    "BufferOverrunError",
    "HarnessError",
    "InvalidVectorError",
    "KeySetupMismatchError",
    "OperationFailedError",
    "OutOfMemoryError",
    "ResetFailedError",
    "RunInterruptedError",
    "SetKeyFailedError",
    "ShortReadError",
    "VectorMismatchError",
]
