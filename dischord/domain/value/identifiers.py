"""Strongly typed identifiers for Dischord domain entities.

Identifiers are opaque strings generated by the service layer. NewType keeps
the different entity IDs from being mixed up in signatures.
"""

import secrets
from typing import NewType

UserId = NewType("UserId", str)
ServerId = NewType("ServerId", str)
PostId = NewType("PostId", str)
MessageId = NewType("MessageId", str)


def new_id() -> str:
    """Generate a fresh identifier (16 random bytes, hex encoded)."""
    return secrets.token_hex(16)
