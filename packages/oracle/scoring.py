"""
Exact-position match scoring for a single (guess, secret) pair.

There is no "right letter, wrong place" signal (unlike Mastermind pegs): the
only information returned is how many positions hold the same letter.

Examples:
  match_count("BACX", "BXCA") -> 2
  match_count("UUUU", "BACX") -> 0
"""


def match_count(guess: str, secret: str) -> int:
    """
    Count positions i where guess[i] == secret[i].

    Preconditions:
      - len(guess) == len(secret)
    """
    assert len(guess) == len(secret), "Guess and secret must be the same length"
    return sum(1 for g, s in zip(guess, secret) if g == s)
