import math
from typing import Optional

from .errors import InvariantError
from .llrbtree import Mode, Node, is_red


def height(node: Optional[Node]) -> int:
    """Number of nodes on the longest path from node down to a leaf"""
    if node is None:
        return 0
    return 1 + max(height(node.left), height(node.right))


def check_invariants(tree) -> int:
    """Check every structural invariant of the tree, raising InvariantError
    on the first violation. Returns the black-height of the root.
    """
    root = tree.root
    if root is None:
        if len(tree) != 0:
            raise InvariantError(f"empty tree reports {len(tree)} bindings")
        return 0

    if is_red(root):
        raise InvariantError(f"root {root.key} is red")

    count, black_height = _check_subtree(root, None, None, tree.mode)

    if count != len(tree):
        raise InvariantError(f"tree holds {count} nodes but reports {len(tree)}")

    bound = 2 * math.log2(count + 1)
    if height(root) > bound:
        raise InvariantError(f"height {height(root)} exceeds 2*log2(n+1) = {bound:.2f}")

    return black_height


def _check_subtree(node: Optional[Node], low, high, mode: Mode):
    """Returns (node count, black-height) of the subtree"""
    if node is None:
        return 0, 0

    # BST order, with keys strictly inside the bounds set by the ancestors
    if (low is not None and node.key <= low) or (high is not None and node.key >= high):
        raise InvariantError(f"key {node.key} is out of order (bounds {low}, {high})")

    if is_red(node.right) and not is_red(node.left):
        raise InvariantError(f"node {node.key} has a right-leaning red link")
    if mode is Mode.TWO_THREE and is_red(node.right):
        raise InvariantError(f"node {node.key} holds a 4-node in a 2-3 tree")
    if is_red(node.left) and is_red(node.left.left):
        raise InvariantError(f"node {node.key} has two consecutive red links on the left")
    if is_red(node) and (is_red(node.left) or is_red(node.right)):
        raise InvariantError(f"red node {node.key} has a red child")

    left_count, left_black = _check_subtree(node.left, low, node.key, mode)
    right_count, right_black = _check_subtree(node.right, node.key, high, mode)

    if left_black != right_black:
        raise InvariantError(
            f"black-height mismatch under {node.key}: {left_black} left, {right_black} right")

    return left_count + right_count + 1, left_black + (0 if is_red(node) else 1)
