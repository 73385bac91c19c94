"""
Generators for the parameter names used inside ``Fn::Sub`` templates.

A generator is created per compilation pass and every name it hands out is
unique for that pass.
"""

from __future__ import annotations

import random
import string
from typing import Callable, Set

from state_machine_compiler.errors import PlaceholderExhaustedError

TokenGenerator = Callable[[], str]
TokenFactory = Callable[[], TokenGenerator]

# Full alphanumeric pool, valid inside ``${...}`` substitution names.
RANDOM_POOL = string.ascii_letters + string.digits
# Digits first so the first names read as plain counters.
SEQUENTIAL_ALPHABET = string.digits + string.ascii_letters
SEQUENTIAL_PREFIX = "smParam"


def _encode(number: int, width: int) -> str:
    base = len(SEQUENTIAL_ALPHABET)
    digits = []
    while number:
        number, remainder = divmod(number, base)
        digits.append(SEQUENTIAL_ALPHABET[remainder])
    return "".join(reversed(digits)).rjust(width, SEQUENTIAL_ALPHABET[0])


class SequentialTokens:
    """
    Deterministic generator: ``smParam001``, ``smParam002``, ... ``smParam00z``,
    ``smParam00A``, ...

    The counter is written in base 62 and padded to a fixed length, so every
    token in a pass has the same width.
    """

    def __init__(self, length: int = 10, prefix: str = SEQUENTIAL_PREFIX) -> None:
        if length <= len(prefix):
            prefix = prefix[: max(length - 3, 1)]
        self._prefix = prefix
        self._width = length - len(prefix)
        self._capacity = len(SEQUENTIAL_ALPHABET) ** self._width - 1
        self._counter = 0

    def __call__(self) -> str:
        if self._counter >= self._capacity:
            raise PlaceholderExhaustedError(
                f"Placeholder space exhausted after {self._capacity} names; "
                f"raise PLACEHOLDER_LENGTH above {len(self._prefix) + self._width}"
            )
        self._counter += 1
        return f"{self._prefix}{_encode(self._counter, self._width)}"


class RandomTokens:
    """
    Random alphanumeric names that are redrawn on collision within one pass.
    """

    def __init__(self, length: int = 10, rng: random.Random | None = None) -> None:
        self._length = length
        self._rng = rng or random.SystemRandom()
        self._issued: Set[str] = set()

    def __call__(self) -> str:
        while True:
            token = "".join(self._rng.choice(RANDOM_POOL) for _ in range(self._length))
            if token not in self._issued:
                self._issued.add(token)
                return token


def token_factory_from_config(strategy: str | None = None, length: int | None = None) -> TokenFactory:
    """
    Build a factory producing a fresh generator for every compilation pass.
    """

    from shared.config import config

    strategy = strategy or config.placeholder_strategy
    length = length or config.placeholder_length
    if strategy == "random":
        return lambda: RandomTokens(length)
    if strategy == "sequential":
        return lambda: SequentialTokens(length)
    raise ValueError(f"Unknown placeholder strategy {strategy!r}; expected 'sequential' or 'random'")
