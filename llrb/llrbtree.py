import enum
import logging
from typing import Callable, Iterator, Optional, Tuple

from .errors import AllocationError, KeyRangeError

logger = logging.getLogger(__name__)

MAX_KEY = 0xFFFFFFFF


class Colour(enum.Enum):
    BLACK = 0
    RED = 1


class Mode(enum.Enum):
    TWO_THREE = "2-3"
    TWO_THREE_FOUR = "2-3-4"


class _NotFound:

    def __repr__(self):
        return "NOT_FOUND"

    def __bool__(self):
        return False


NOT_FOUND = _NotFound()


class Node:

    def __init__(self, key: int, value=None):
        self.key = key
        self.value = value
        self.colour = Colour.RED
        self.left: Optional[Node] = None
        self.right: Optional[Node] = None

    def __repr__(self):
        return f"<{self.colour.name} {self.key!r}: {self.value!r}>"


def is_valid_key(key) -> bool:
    return isinstance(key, int) and not isinstance(key, bool) and 0 <= key <= MAX_KEY


def is_red(node: Optional[Node]) -> bool:
    """Absent children are black"""
    return node is not None and node.colour == Colour.RED


def _toggle(node: Node):
    node.colour = Colour.BLACK if node.colour == Colour.RED else Colour.RED


def rotate_left(node: Node) -> Node:
    """Rotate a right-leaning link to the left and return the new subtree root

       4            6
      / \\          /
     2   6  -->   4
                 /
                2
    """
    pivot = node.right
    node.right = pivot.left
    pivot.left = node
    pivot.colour = node.colour
    node.colour = Colour.RED
    return pivot


def rotate_right(node: Node) -> Node:
    """Rotate a left-leaning link to the right and return the new subtree root

       4        2
      / \\        \\
     2   6  -->   4
                   \\
                    6
    """
    pivot = node.left
    node.left = pivot.right
    pivot.right = node
    pivot.colour = node.colour
    node.colour = Colour.RED
    return pivot


def colour_flip(node: Node):
    """Toggle the colour of the node and both of its children"""
    _toggle(node)
    if node.left is not None:
        _toggle(node.left)
    if node.right is not None:
        _toggle(node.right)


def fix_up(node: Node, split: bool = True) -> Node:
    # lean red links left, then pull consecutive left reds into a 4-node
    if is_red(node.right) and not is_red(node.left):
        node = rotate_left(node)
    # a 4-node whose left link returned a red pair only needs the split
    if is_red(node.left) and is_red(node.left.left) and not (split and is_red(node.right)):
        node = rotate_right(node)
    # splitting here on the way back up leaves no 4-nodes behind
    if split and is_red(node.left) and is_red(node.right):
        colour_flip(node)
    return node


def move_red_left(node: Node) -> Node:
    """Make node.left or one of its children red, assuming node is red and
    node.left and node.left.left are black.

    A 3-node or 4-node on the right lends its smallest key. What is left of
    a 4-node sibling is leaned back into a 3-node.
    """
    colour_flip(node)
    if node.right is not None and is_red(node.right.left):
        node.right = rotate_right(node.right)
        node = rotate_left(node)
        colour_flip(node)
        if is_red(node.right.right):
            node.right = rotate_left(node.right)
    return node


def move_red_right(node: Node) -> Node:
    """Make node.right or one of its children red, assuming node is red and
    node.right and node.right.left are black.

    A 4-node on the left is first leaned into a red pair so that it lends
    its largest key the same way a 3-node does.
    """
    if node.left is not None and is_red(node.left.right):
        node.left = rotate_left(node.left)
    colour_flip(node)
    if node.left is not None and is_red(node.left.left):
        node = rotate_right(node)
        colour_flip(node)
    return node


def find_min(node: Node) -> Node:
    """Returns the leftmost node of the subtree"""
    while node.left is not None:
        node = node.left
    return node


class LeftLeaningRedBlackTree:
    """Ordered mapping of 32-bit unsigned keys to values.

    Every recursive engine returns the (possibly new) root of the subtree it
    was handed, and the caller reattaches it to the right child link. There
    are no parent pointers.
    """

    def __init__(self, mode: Mode = Mode.TWO_THREE, check_invariants: bool = False):
        self.mode = Mode(mode)
        self.check_invariants = check_invariants
        self.root: Optional[Node] = None
        self._size = 0

    def __len__(self):
        return self._size

    def is_empty(self):
        return self.root is None

    def insert(self, key: int, value=None):
        """Bind key to value, returning the replaced value or NOT_FOUND"""
        _check_key(key)
        existing = self._search_node(key)
        if existing is not None:
            replaced, existing.value = existing.value, value
            logger.debug("replaced value for key %d", key)
            self._after_mutation()
            return replaced

        # allocate before touching the tree so a failure leaves it unchanged
        try:
            fresh = Node(key, value)
        except MemoryError as exc:
            raise AllocationError(f"could not allocate a node for key {key}") from exc

        top_down = self.mode is Mode.TWO_THREE_FOUR
        self.root = self._insert(self.root, fresh, top_down)
        self.root.colour = Colour.BLACK
        self._size += 1
        logger.debug("inserted key %d", key)
        self._after_mutation()
        return NOT_FOUND

    def _insert(self, node: Optional[Node], fresh: Node, top_down: bool) -> Node:
        # the new node is linked in by the caller frame
        if node is None:
            return fresh

        # 2-3-4 trees split 4-nodes on the way down and keep the ones that
        # form at the bottom
        if top_down and is_red(node.left) and is_red(node.right):
            colour_flip(node)

        if fresh.key < node.key:
            node.left = self._insert(node.left, fresh, top_down)
        else:
            node.right = self._insert(node.right, fresh, top_down)

        return fix_up(node, split=not top_down)

    def lookup(self, key: int):
        """Returns the value bound to key, or NOT_FOUND"""
        _check_key(key)
        node = self._search_node(key)
        if node is None:
            return NOT_FOUND
        return node.value

    def _search_node(self, key: int) -> Optional[Node]:
        node = self.root
        while node is not None:
            if key == node.key:
                return node
            node = node.left if key < node.key else node.right
        return None

    def delete(self, key: int) -> bool:
        """Remove the binding for key. Returns whether the key was present"""
        _check_key(key)
        # the descent restructures the tree, so only start it when the key
        # is actually there
        if self._search_node(key) is None:
            return False

        self.root = self._delete(self.root, key)
        if self.root is not None:
            self.root.colour = Colour.BLACK
        self._size -= 1
        logger.debug("deleted key %d", key)
        self._after_mutation()
        return True

    def _delete(self, node: Node, key: int) -> Optional[Node]:
        # invariant on the way down: node or its child in the search
        # direction is red
        if key < node.key:
            if node.left is None:
                return node
            if not is_red(node.left) and not is_red(node.left.left):
                node = move_red_left(node)
            node.left = self._delete(node.left, key)
        else:
            # the right link of a 4-node is already red
            if is_red(node.left) and not is_red(node.right):
                node = rotate_right(node)

            # a matching node without a right child is a leaf here
            if key == node.key and node.right is None:
                return None
            if node.right is None:
                return fix_up(node)

            if not is_red(node.right) and not is_red(node.right.left):
                node = move_red_right(node)

            if key == node.key:
                # internal node: take over the successor's binding, then
                # unlink the successor node itself
                successor = find_min(node.right)
                node.key = successor.key
                node.value = successor.value
                node.right = self._delete_min(node.right)
            else:
                node.right = self._delete(node.right, key)

        return fix_up(node)

    def _delete_min(self, node: Node) -> Optional[Node]:
        # left-leaning, so a node without a left child has no right child
        if node.left is None:
            return None
        if not is_red(node.left) and not is_red(node.left.left):
            node = move_red_left(node)
        node.left = self._delete_min(node.left)
        return fix_up(node)

    def traverse(self, visit: Callable[[int, object], None]):
        """Call visit(key, value) for every binding in ascending key order.

        The visitor must not mutate the tree.
        """
        self._traverse(self.root, visit)

    def _traverse(self, node: Optional[Node], visit):
        if node is None:
            return
        self._traverse(node.left, visit)
        visit(node.key, node.value)
        self._traverse(node.right, visit)

    def clear(self):
        released = self._release(self.root)
        self.root = None
        self._size = 0
        logger.debug("cleared tree, released %d nodes", released)

    def _release(self, node: Optional[Node]) -> int:
        """Unlink every node of the subtree in post-order"""
        if node is None:
            return 0
        released = self._release(node.left) + self._release(node.right)
        node.left = node.right = None
        return released + 1

    def _after_mutation(self):
        if self.check_invariants:
            self.validate()

    def validate(self) -> int:
        """Raise InvariantError unless the tree is well formed. Returns the black-height"""
        from .validate import check_invariants
        return check_invariants(self)

    def to_graph(self):
        from .graph import to_graph
        return to_graph(self)

    # mapping-style conveniences

    def __contains__(self, key) -> bool:
        return is_valid_key(key) and self._search_node(key) is not None

    def __getitem__(self, key: int):
        value = self.lookup(key)
        if value is NOT_FOUND:
            raise KeyError(key)
        return value

    def __setitem__(self, key: int, value):
        self.insert(key, value)

    def __delitem__(self, key: int):
        if not self.delete(key):
            raise KeyError(key)

    def __iter__(self) -> Iterator[int]:
        for key, _ in self.items():
            yield key

    def items(self) -> Iterator[Tuple[int, object]]:
        """Yields (key, value) pairs in ascending key order"""
        for node in self._nodes():
            yield node.key, node.value

    def _nodes(self) -> Iterator[Node]:
        stack = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def min_key(self) -> int:
        if self.root is None:
            raise KeyError("min_key() on an empty tree")
        return find_min(self.root).key

    def max_key(self) -> int:
        if self.root is None:
            raise KeyError("max_key() on an empty tree")
        node = self.root
        while node.right is not None:
            node = node.right
        return node.key

    def height(self, node: Optional[Node] = None) -> int:
        """Number of nodes on the longest root-to-leaf path"""
        from .validate import height
        return height(node if node is not None else self.root)

    def pprint(self, node: Optional[Node] = None, depth=0, side="ROOT") -> str:
        if depth == 0 and node is None:
            node = self.root
        if node is None:
            return "\t" * depth + "|_ null\n"
        # recursively draw a tree
        return ("\t" * depth + f"|_ {side} | {node.key}: {node.colour.name}\n"
                + self.pprint(node.left, depth + 1, "LEFT")
                + self.pprint(node.right, depth + 1, "RIGHT"))


def _check_key(key):
    if not is_valid_key(key):
        raise KeyRangeError(f"key must be an integer in [0, {MAX_KEY}], got {key!r}")
