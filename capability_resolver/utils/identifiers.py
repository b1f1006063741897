"""Identifier helpers for generated resources."""

import random
import string
import uuid
from typing import Optional

SHORT_STRING_ALPHABET = string.ascii_lowercase + string.digits


def new_uid() -> str:
    """Return a fresh unique identifier."""
    return str(uuid.uuid4())


def short_random_string(length: int, rng: Optional[random.Random] = None) -> str:
    """Return a short lowercase alphanumeric string, e.g. for worker names."""
    rng = rng or random.Random()
    # worker names must start with a letter
    first = rng.choice(string.ascii_lowercase)
    rest = "".join(rng.choice(SHORT_STRING_ALPHABET) for _ in range(length - 1))
    return first + rest
