"""
Reference oracle holding one secret.

evaluate(guess) returns:
  -1  if the guess contains a letter outside the alphabet (checked first)
  -2  if the guess length differs from the secret length
  >=0 the number of exact-position matches

An exact match (result == len(guess)) is reported like any other count; the
caller decides what to do with it.
"""

from __future__ import annotations

from .rules import INVALID_ALPHABET, WRONG_LENGTH
from .scoring import match_count
from .validation import uses_alphabet, validate_secret


class SecretOracle:
    def __init__(self, secret: str):
        self._secret = validate_secret(secret)
        self.calls = 0

    @property
    def length(self) -> int:
        return len(self._secret)

    def evaluate(self, guess: str) -> int:
        self.calls += 1
        if not uses_alphabet(guess):
            return INVALID_ALPHABET
        if len(guess) != len(self._secret):
            return WRONG_LENGTH
        return match_count(guess, self._secret)

    def __repr__(self) -> str:
        return f"SecretOracle(length={self.length}, calls={self.calls})"
