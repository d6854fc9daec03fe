import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

DIE_FACES = 100


class RandomnessSource:
    """Uniform integers in a closed range and uniform picks from a list.

    Uses the operating system's entropy by default. Pass a seed to get a
    reproducible sequence.
    """

    def __init__(self, seed: Optional[int] = None):
        self._random = random.SystemRandom() if seed is None else random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)

    def choice(self, options: Sequence[T]) -> T:
        return self._random.choice(options)

    def roll_die(self, faces: int = DIE_FACES) -> int:
        return self.randint(1, faces)
