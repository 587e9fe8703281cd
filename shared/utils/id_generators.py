"""
Secure string generators using Python's secrets module.
Primary keys across the platform are short random letter strings.
"""

import secrets
import string

from typing_extensions import LiteralString


def generate_lower_uppercase(length: int = 6) -> str:
    """
    Generate a secure random string with lowercase and uppercase letters.

    Args:
        length (int): Length of the string to generate. Default is 6.

    Returns:
        str: A secure random string.
    """
    chars: LiteralString = string.ascii_lowercase + string.ascii_uppercase
    return "".join(secrets.choice(seq=chars) for _ in range(length))
