"""Exploration record: a provenance log of every board the solver considers."""

from dataclasses import dataclass, field
from time import time
from typing import TypeAlias

from polytile.board import Board

NodeId: TypeAlias = int
"""Index of a node in the exploration record, in insertion order."""


@dataclass
class ExplorationRecord:
    """Boards checked during solving, with their parent links and aggregate counters.

    Nodes are kept in an arena addressed by sequential index, so distinct branches that
    happen to reach identical boards stay distinct.  The record is diagnostic only and
    has no influence on the search.
    """

    keep_boards: bool = True
    """Whether to store a snapshot of each inserted board."""

    boards_checked: int = 0
    """Number of board states checked during solving (including the initial board)."""

    skipped_isolated: int = 0
    """Number of boards discarded because they contained a walled-in empty cell."""

    max_depth_reached: int = 0
    """Maximum number of pieces placed on any board checked."""

    start_time: float = field(default_factory=time)
    """Timestamp when solving started."""

    _boards: list[Board | None] = field(default_factory=list, repr=False)
    _parents: list[NodeId | None] = field(default_factory=list, repr=False)
    _children: dict[NodeId, list[NodeId]] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self._parents)

    def insert(self, parent: NodeId | None, board: Board) -> NodeId:
        """Log a board, optionally under `parent`, and return its node id.

        The caller must not mutate `board` afterwards if snapshots are kept.
        """
        if parent is not None and not 0 <= parent < len(self._parents):
            raise KeyError(f"Unknown parent node {parent}.")
        node_id = len(self._parents)
        self._boards.append(board if self.keep_boards else None)
        self._parents.append(parent)
        if parent is not None:
            self._children.setdefault(parent, []).append(node_id)
        self.boards_checked += 1
        return node_id

    def board(self, node_id: NodeId) -> Board | None:
        """Get the board snapshot of a node (None when snapshots are disabled)."""
        return self._boards[node_id]

    def parent(self, node_id: NodeId) -> NodeId | None:
        """Get the parent of a node, or None for a root."""
        return self._parents[node_id]

    def children(self, node_id: NodeId) -> list[NodeId]:
        """Get the children of a node, in insertion order."""
        if not 0 <= node_id < len(self._parents):
            raise KeyError(f"Unknown node {node_id}.")
        return list(self._children.get(node_id, []))

    def path(self, node_id: NodeId) -> list[NodeId]:
        """Get the node ids from the root down to `node_id` (inclusive)."""
        path: list[NodeId] = []
        current: NodeId | None = node_id
        while current is not None:
            path.append(current)
            current = self._parents[current]
        path.reverse()
        return path

    def summary(self) -> dict[str, object]:
        """Return a dictionary-based summary of the counters."""
        return {
            "boards_checked": self.boards_checked,
            "skipped_isolated": self.skipped_isolated,
            "max_depth_reached": self.max_depth_reached,
            "nodes": len(self),
            "elapsed_sec": round(time() - self.start_time, 3),
        }
