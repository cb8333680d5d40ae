from .rules import ALPHABET, MAX_LENGTH, INVALID_ALPHABET, WRONG_LENGTH
from .scoring import match_count
from .validation import is_valid_code, validate_secret
from .oracle import SecretOracle

__all__ = [
    "ALPHABET", "MAX_LENGTH", "INVALID_ALPHABET", "WRONG_LENGTH",
    "match_count", "is_valid_code", "validate_secret", "SecretOracle",
]
