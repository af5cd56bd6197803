from .errors import AllocationError, InvariantError, KeyRangeError, LLRBError
from .llrbtree import MAX_KEY, NOT_FOUND, Colour, LeftLeaningRedBlackTree, Mode, Node

__all__ = [
    "AllocationError",
    "Colour",
    "InvariantError",
    "KeyRangeError",
    "LLRBError",
    "LeftLeaningRedBlackTree",
    "MAX_KEY",
    "Mode",
    "NOT_FOUND",
    "Node",
]
