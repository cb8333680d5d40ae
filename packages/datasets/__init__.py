from .validator import validate_secrets, pretty_summary
from .io import read_lines, read_secrets, write_lines
from .generate import random_secrets

__all__ = ["validate_secrets", "pretty_summary", "read_lines", "read_secrets", "write_lines",
           "random_secrets"]
