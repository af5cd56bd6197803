class LLRBError(Exception):
    """Base class for errors raised by the llrb package"""


class KeyRangeError(LLRBError, ValueError):
    """The key is not an unsigned 32-bit integer"""


class AllocationError(LLRBError, MemoryError):
    """A node could not be allocated; the tree was left unchanged"""


class InvariantError(LLRBError, AssertionError):
    """The tree violates one of its structural invariants"""
