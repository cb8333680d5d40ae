"""
Fixed game rules shared by the oracle and every solver.

The alphabet order is canonical: solvers use it for every deterministic
tie-break (letter priority, filler choice, base letter for length discovery).
"""

# Allowed letters, in canonical order.
ALPHABET = "BACXIU"

# Longest secret the oracle may hold. Length discovery never probes beyond it.
MAX_LENGTH = 18

# Oracle sentinels
INVALID_ALPHABET = -1
WRONG_LENGTH = -2
