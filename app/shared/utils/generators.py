"""Primary key generation for ORM rows."""

from cuid2 import Cuid

# Existing rows carry 25-character cuids; new keys keep the same width.
ID_LENGTH = 25

_generator = Cuid(length=ID_LENGTH)


def generate_cuid() -> str:
    """Return a new collision-resistant row ID (CUID2, ID_LENGTH chars)."""
    return _generator.generate()
