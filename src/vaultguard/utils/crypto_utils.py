import secrets
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """
    Randomness capability the generator and shuffler depend on.

    Anything with ``choice`` and ``randrange`` in the shape of
    ``random.Random`` satisfies it. Production code uses the OS backed
    CSPRNG from :func:`system_random`; tests may pass a seeded
    ``random.Random`` for repeatable output.
    """

    def choice(self, seq: Sequence[T]) -> T: ...

    def randrange(self, stop: int) -> int: ...


def system_random() -> RandomSource:
    """
    Return a cryptographically secure random source.

    Backed by ``os.urandom`` through the `secrets` module. Credential
    material must never be sampled from the default Mersenne Twister.
    """
    return secrets.SystemRandom()
