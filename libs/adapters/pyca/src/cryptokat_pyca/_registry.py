
from __future__ import annotations
from typing import Dict, Any, Callable

class _Registry:
    """Transform name -> transform class, filled by the ``register`` decorator."""

    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}

    def register(self, name: str) -> Callable[[Any], Any]:
        def _inner(cls: Any) -> Any:
            if name in self._items:
                raise ValueError(f"transform {name!r} registered twice")
            self._items[name] = cls
            return cls
        return _inner

    def get(self, name: str) -> Any:
        try:
            return self._items[name]
        except KeyError:
            raise LookupError(f"no transform named {name!r}") from None

    def list(self) -> Dict[str, Any]:
        return dict(self._items)

transforms = _Registry()
