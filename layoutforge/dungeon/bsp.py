"""Binary space partitioning of the level grid.

Nodes live in a flat arena (``SpaceTree.nodes``); children are referenced by
index. The tree is built with an explicit worklist so very large grids cannot
hit the interpreter recursion limit.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, NamedTuple, Optional


class BSPOptions(NamedTuple):
    min_room_size: int
    max_room_size: int
    split_ratio: float  # 0.4 - 0.6
    min_split_size: int


@dataclass
class SpaceNode:
    x: int
    y: int
    width: int
    height: int
    left: Optional[int] = None
    right: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def area(self) -> int:
        return self.width * self.height


class SpaceTree:
    def __init__(self, width: int, height: int):
        self.nodes: List[SpaceNode] = [SpaceNode(0, 0, width, height)]

    @property
    def root(self) -> SpaceNode:
        return self.nodes[0]

    def add(self, node: SpaceNode) -> int:
        self.nodes.append(node)
        return len(self.nodes) - 1

    def leaves(self) -> List[SpaceNode]:
        """Childless nodes in left-to-right depth-first order."""
        out: List[SpaceNode] = []
        stack = [0]
        while stack:
            node = self.nodes[stack.pop()]
            if node.is_leaf:
                out.append(node)
                continue
            # push right first so left is visited first
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return out


def _is_room_sized(node: SpaceNode, opts: BSPOptions) -> bool:
    limit = opts.max_room_size * 1.5
    return (
        node.width <= limit
        and node.height <= limit
        and node.width >= opts.min_room_size
        and node.height >= opts.min_room_size
    )


def _split_position(axis_len: int, opts: BSPOptions, rng: random.Random) -> int:
    lo = opts.min_split_size
    hi = axis_len - opts.min_split_size
    span = hi - lo
    pos = math.floor(lo + span * opts.split_ratio)
    jitter = math.floor(span * 0.2 * (rng.random() - 0.5))
    return max(lo, min(hi, pos + jitter))


def create_bsp_tree(width: int, height: int, opts: BSPOptions, rng: Optional[random.Random] = None) -> SpaceTree:
    """Partition a ``width`` x ``height`` grid until every leaf is room sized or unsplittable."""
    if rng is None:
        rng = random.Random()
    tree = SpaceTree(width, height)
    work = [0]
    while work:
        idx = work.pop()
        node = tree.nodes[idx]
        if node.width < opts.min_split_size or node.height < opts.min_split_size:
            continue
        if _is_room_sized(node, opts):
            continue
        cut_width = node.width > node.height
        axis_len = node.width if cut_width else node.height
        if axis_len < opts.min_split_size * 2:
            continue
        pos = _split_position(axis_len, opts, rng)
        if cut_width:
            a = SpaceNode(node.x, node.y, pos, node.height)
            b = SpaceNode(node.x + pos, node.y, node.width - pos, node.height)
        else:
            a = SpaceNode(node.x, node.y, node.width, pos)
            b = SpaceNode(node.x, node.y + pos, node.width, node.height - pos)
        node.left = tree.add(a)
        node.right = tree.add(b)
        # depth-first, left subtree first (keeps rng draw order stable)
        work.append(node.right)
        work.append(node.left)
    return tree


def get_leaf_nodes(tree: SpaceTree) -> List[SpaceNode]:
    return tree.leaves()


__all__ = ["BSPOptions", "SpaceNode", "SpaceTree", "create_bsp_tree", "get_leaf_nodes"]
