"""Domain value types for Dischord."""

from enum import IntEnum


class VoteValue(IntEnum):
    """Value of a single vote.

    NONE is a retracted vote: the row is kept but contributes nothing to the
    post's tally.
    """

    DOWN = -1
    NONE = 0
    UP = 1
