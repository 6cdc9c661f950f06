# src/infrastructure/mockup/seeded_random.py
import math

MODULUS = 2147483647  # 2**31 - 1
MULTIPLIER = 16807


class SeededRandom:
    """
    Park-Miller linear congruential generator.

    The same seed always yields the same sequence on every platform, which is
    what keeps the mockup dataset stable between restarts.
    """

    def __init__(self, seed: int):
        # Truncating remainder: the sign follows the seed, then shift into [1, MODULUS - 1]
        state = abs(seed) % MODULUS
        if seed < 0:
            state = -state
        if state <= 0:
            state += MODULUS - 1
        self._state = state

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Next value in [0, 1)."""
        self._state = (self._state * MULTIPLIER) % MODULUS
        return (self._state - 1) / (MODULUS - 1)

    def next_int(self, min_value: int, max_value: int) -> int:
        """Next integer in [min_value, max_value], both inclusive."""
        return math.floor(self.next() * (max_value - min_value + 1)) + min_value
