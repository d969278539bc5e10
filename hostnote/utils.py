"""Validation and token helpers shared by the storage core."""

import re
import secrets
from typing import Any

from hostnote.constants import MAX_FILENAME_LENGTH, PUBLIC_ID_BYTES
from hostnote.exceptions import InvalidInputError

FILENAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

PUBLIC_ID_PATTERN = re.compile(r"^[a-f0-9]{32}$")


def is_valid_filename(filename: Any) -> bool:
    """
    Check a user-supplied filename against the safe naming rules.

    Args:
        filename: Candidate filename

    Returns:
        True if the name can be used to build a path inside a namespace
    """
    if not filename or not isinstance(filename, str):
        return False
    if len(filename) > MAX_FILENAME_LENGTH:
        return False
    if ".." in filename or "/" in filename or "\\" in filename:
        return False
    # fullmatch: "$" alone would accept a trailing newline
    return FILENAME_PATTERN.fullmatch(filename) is not None


def validate_filename(filename: Any) -> str:
    """
    Raise InvalidInputError unless filename is safe.
    """
    if not is_valid_filename(filename):
        raise InvalidInputError("Invalid filename")
    return filename


def generate_public_id() -> str:
    """
    Generate a new 128-bit public link token.

    Returns:
        32 lowercase hex characters
    """
    return secrets.token_hex(PUBLIC_ID_BYTES)


def is_valid_public_id(public_id: Any) -> bool:
    return isinstance(public_id, str) and PUBLIC_ID_PATTERN.fullmatch(public_id) is not None
