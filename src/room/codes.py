"""
Housie Live - Room Codes

Room identifiers are short, case-insensitive codes that players read aloud
to each other, so the alphabet avoids characters that are easy to confuse.
"""

import secrets
import string

ROOM_CODE_ALPHABET = (
    string.ascii_uppercase.replace("O", "").replace("I", "")
    + string.digits.replace("0", "").replace("1", "")
)


def generate_room_code(length: int = 6) -> str:
    """Generate an alphanumeric room code, avoiding ambiguous characters."""
    if length < 1:
        raise ValueError(f"Room code length must be positive, got {length}.")
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def normalize_room_id(room_id: str | None) -> str:
    """Strip and upper-case a user-entered room id ("" when absent)."""
    return (room_id or "").strip().upper()
