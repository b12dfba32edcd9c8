"""
policypass.random_source
Unsigned 32-bit draws from the operating system's CSPRNG.
"""

from random import SystemRandom

from .errors import EntropySourceError

UINT32_BITS = 32


class SecureRandomSource:
    """
    Uniform random unsigned 32-bit integers backed by ``random.SystemRandom``.

    SystemRandom reads os.urandom on every call, so there is no state to seed
    or replay and one instance can be shared between threads.
    """

    def __init__(self):
        self._sysrand = SystemRandom()

    def next_uint32(self) -> int:
        try:
            return self._sysrand.getrandbits(UINT32_BITS)
        except (OSError, NotImplementedError) as e:
            raise EntropySourceError("secure random source unavailable") from e

    def __repr__(self) -> str:
        return "SecureRandomSource()"
