"""Transform provider for cryptokat built on ``cryptography``.

Importing submodules triggers registration of the transforms.
"""

# Trigger registration side-effects
from . import ciphers as _ciphers  # noqa: F401
from . import cprng as _cprng  # noqa: F401
from . import digests as _digests  # noqa: F401
from ._registry import transforms
from .provider import Provider

__all__ = ["Provider", "transforms"]
