"""Client-side entity identifier generation."""

import secrets
import time

ID_PREFIX = "c"
ID_LENGTH = 25

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_TIMESTAMP_LENGTH = 8
_RANDOM_LENGTH = ID_LENGTH - len(ID_PREFIX) - _TIMESTAMP_LENGTH


def _base36(value: int, width: int) -> str:
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits)).rjust(width, "0")[-width:]


def new_id() -> str:
    """Generate a collision-resistant identifier.

    The id is ``c`` followed by a base36 millisecond timestamp and
    random base36 characters, 25 characters in total. Ids generated
    later sort after earlier ones at millisecond resolution.
    """
    timestamp = _base36(time.time_ns() // 1_000_000, _TIMESTAMP_LENGTH)
    randomness = "".join(secrets.choice(_ALPHABET) for _ in range(_RANDOM_LENGTH))
    return f"{ID_PREFIX}{timestamp}{randomness}"
