"""Depth-first search through the states of a small blocks world.

A state is a tuple in which entry ``i`` says what block ``i`` rests on:
another block's index, or :data:`TABLE`.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

TABLE = -1
MAX_DEPTH = 99


@dataclass
class Node:
    """One state of the search, linked to the state it was reached from."""

    number: int
    blocks: tuple[int, ...]
    depth: int = 0
    parent: Optional["Node"] = field(default=None, repr=False, compare=False)

    def path(self) -> list["Node"]:
        """Return the nodes from the start of the search down to this one."""
        nodes = []
        node: Optional[Node] = self
        while node is not None:
            nodes.append(node)
            node = node.parent
        nodes.reverse()
        return nodes


def is_uncovered(blocks: Sequence[int], block: int) -> bool:
    """Return True if no block rests on ``block``."""
    return block not in blocks


def _moved(blocks: Sequence[int], block: int, place: int) -> tuple[int, ...]:
    state = list(blocks)
    state[block] = place
    return tuple(state)


def move_block(node: Node, number: int, block: int, place: int) -> Node:
    """Return a child of ``node`` in which ``block`` rests on ``place``."""
    if not 0 <= block < len(node.blocks):
        raise ValueError(f"block {block} does not exist")
    if place != TABLE and not 0 <= place < len(node.blocks):
        raise ValueError(f"place {place} does not exist")
    return Node(
        number=number,
        blocks=_moved(node.blocks, block, place),
        depth=node.depth + 1,
        parent=node,
    )


def solve(
    start: Sequence[int], goal: Sequence[int], max_depth: int = MAX_DEPTH
) -> Optional[Node]:
    """Search depth first from ``start`` for ``goal``.

    Returns the goal node, whose :meth:`Node.path` is the solution, or None
    when the search space is exhausted.  Only uncovered blocks are moved,
    only onto the table or an uncovered block, and no state is visited twice.
    The start state itself is never tested against the goal.
    """
    start_state = tuple(start)
    goal_state = tuple(goal)
    if len(start_state) != len(goal_state):
        raise ValueError("start and goal must describe the same blocks")
    count = len(start_state)
    for state in (start_state, goal_state):
        if any(place != TABLE and not 0 <= place < count for place in state):
            raise ValueError(f"state {state} refers to a missing block")

    node_number = 0
    open_list: deque[Node] = deque([Node(node_number, start_state)])
    node_number += 1
    seen = {start_state}
    found: Optional[Node] = None

    while found is None and open_list:
        node = open_list.popleft()
        if node.depth >= max_depth:
            continue
        for block in range(count):
            if not is_uncovered(node.blocks, block):
                continue
            places = [] if node.blocks[block] == TABLE else [TABLE]
            places += [
                other
                for other in range(count)
                if other != block and is_uncovered(node.blocks, other)
            ]
            for place in places:
                state = _moved(node.blocks, block, place)
                if state in seen:
                    continue
                child = move_block(node, node_number, block, place)
                node_number += 1
                seen.add(state)
                if found is None and child.blocks == goal_state:
                    found = child
                open_list.appendleft(child)
    return found