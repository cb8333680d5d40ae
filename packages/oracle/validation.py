"""
Lightweight code validation.

A code (secret or guess) is well-formed iff:
  - it is a string
  - it is 1..MAX_LENGTH characters long
  - every character belongs to ALPHABET (uppercase only)
"""

from .rules import ALPHABET, MAX_LENGTH


def uses_alphabet(code: str) -> bool:
    """True if every character of `code` is an alphabet letter."""
    return all(ch in ALPHABET for ch in code)


def is_valid_code(code: str) -> bool:
    """Return True if `code` could be a secret under the fixed rules."""
    if not isinstance(code, str):
        return False
    return 1 <= len(code) <= MAX_LENGTH and uses_alphabet(code)


def validate_secret(secret: str) -> str:
    """
    Guardrail for anything that seeds an oracle. Returns the secret unchanged,
    raises ValueError with the first problem found.
    """
    if not isinstance(secret, str) or not secret:
        raise ValueError("secret must be a non-empty string")
    if len(secret) > MAX_LENGTH:
        raise ValueError(f"secret length must be <= {MAX_LENGTH}; got {len(secret)}")
    bad = sorted({ch for ch in secret if ch not in ALPHABET})
    if bad:
        raise ValueError(f"secret contains letters outside {ALPHABET}: {bad}")
    return secret
