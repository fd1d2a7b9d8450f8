from .cipher import test_cipher
from .context import RunContext, hexdump
from .hash import test_hash
from .rng import test_rng

# Keep pytest from collecting the runners when a test module imports them.
for _runner in (test_cipher, test_hash, test_rng):
    _runner.__test__ = False
del _runner

__all__ = ["RunContext", "hexdump", "test_cipher", "test_hash", "test_rng"]
