"""Board reconciler: local column projection kept in step with the API.

The board holds three fixed columns ("todo", "in-progress", "done") and
mutates them immediately on user actions. The matching API call is
submitted to an executor and not awaited; a failed create leaves the
optimistic card in place, a failed move is only logged.

A drag gesture is idle -> dragging (drag_start) -> idle (drag_end or
drag_cancel). Pointer tracking and collision detection are not done
here; callers pass the id under the pointer.
"""
from __future__ import annotations

import logging
import uuid
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

COLUMN_TITLES: Tuple[Tuple[str, str], ...] = (
    ("todo", "Tasks"),
    ("in-progress", "In Progress"),
    ("done", "Done"),
)
NEW_TASK_COLUMN = "todo"


@dataclass
class Card:
    id: str
    content: str
    created_at: Optional[str] = None
    column_id: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Card":
        return cls(
            id=raw["id"],
            content=raw.get("content", ""),
            created_at=raw.get("createdAt"),
            column_id=raw.get("columnId"),
        )


@dataclass
class BoardColumn:
    id: str
    title: str
    tasks: List[Card] = field(default_factory=list)

    def contains(self, item_id: str) -> bool:
        """A column contains its own id and the ids of its cards."""
        return self.id == item_id or any(t.id == item_id for t in self.tasks)

    def index_of(self, item_id: str) -> int:
        for idx, task in enumerate(self.tasks):
            if task.id == item_id:
                return idx
        return -1


def default_columns() -> List[BoardColumn]:
    return [BoardColumn(id=cid, title=title) for cid, title in COLUMN_TITLES]


def array_move(items: List[Any], old_index: int, new_index: int) -> List[Any]:
    """Return a copy with the item at old_index reinserted at new_index."""
    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return moved


class Board:
    def __init__(self, api, executor: Optional[Executor] = None):
        self.api = api
        self.executor: Executor = executor or ThreadPoolExecutor(thread_name_prefix="taskboard")
        self.columns: List[BoardColumn] = default_columns()
        self.active_card: Optional[Card] = None
        self.active_column: Optional[BoardColumn] = None
        self.over_column: Optional[BoardColumn] = None

    # -------------------- queries --------------------
    @property
    def is_dragging(self) -> bool:
        return self.active_card is not None

    def find_column(self, item_id: Optional[str]) -> Optional[BoardColumn]:
        if item_id is None:
            return None
        for col in self.columns:
            if col.contains(item_id):
                return col
        return None

    def column(self, column_id: str) -> BoardColumn:
        for col in self.columns:
            if col.id == column_id:
                return col
        raise KeyError(column_id)

    def total_cards(self) -> int:
        return sum(len(col.tasks) for col in self.columns)

    def as_dict(self) -> Dict[str, List[str]]:
        return {col.id: [t.id for t in col.tasks] for col in self.columns}

    # -------------------- load --------------------
    def load(self) -> None:
        """Replace the projection with the server's tasks.

        Tasks whose columnId is not one of the board's columns are dropped.
        """
        rows = self.api.get_tasks()
        columns = default_columns()
        by_id = {col.id: col for col in columns}
        for raw in rows:
            card = Card.from_dict(raw)
            col = by_id.get(card.column_id)
            if col is None:
                logger.debug(f"Dropping task {card.id} with unknown column {card.column_id!r}")
                continue
            col.tasks.append(card)
        self.columns = columns

    # -------------------- create --------------------
    def add_task(self, content: str) -> Optional[Future]:
        if not content or not content.strip():
            return None

        card = Card(
            id=str(uuid.uuid4()),
            content=content,
            created_at=datetime.now(timezone.utc).isoformat(),
            column_id=NEW_TASK_COLUMN,
        )
        todo = self.column(NEW_TASK_COLUMN)
        todo.tasks.insert(0, card)

        # No rollback: a failed create stays on the board, the future keeps the error
        return self.executor.submit(self.api.create_task, {
            "id": card.id,
            "columnId": NEW_TASK_COLUMN,
            "content": card.content,
            "createdAt": card.created_at,
        })

    # -------------------- drag lifecycle --------------------
    def drag_start(self, active_id: str) -> None:
        col = self.find_column(active_id)
        if col is None:
            return
        idx = col.index_of(active_id)
        if idx < 0:
            return
        self.active_card = col.tasks[idx]
        self.active_column = col

    def drag_over(self, over_id: Optional[str]) -> None:
        # Tracks the hovered column only; the projection is not previewed mid-drag
        self.over_column = self.find_column(over_id) if self.is_dragging else None

    def drag_cancel(self) -> None:
        self._clear_drag()

    def drag_end(self, over_id: Optional[str]) -> Optional[Future]:
        card = self.active_card
        source = self.active_column
        try:
            if card is None or source is None or not over_id or over_id == card.id:
                return None
            dest = self.find_column(over_id)
            if dest is None:
                return None

            future = self.executor.submit(self.api.update_task, card.id, {"columnId": dest.id})
            future.add_done_callback(lambda f, task_id=card.id: self._log_update_failure(f, task_id))

            if source is not dest:
                source.tasks = [t for t in source.tasks if t.id != card.id]
                card.column_id = dest.id
                dest.tasks = dest.tasks + [card]
            else:
                old_index = source.index_of(card.id)
                new_index = source.index_of(over_id)
                if new_index < 0:
                    # Dropped on its own column's empty area
                    new_index = len(source.tasks) - 1
                if old_index >= 0:
                    source.tasks = array_move(source.tasks, old_index, new_index)
            return future
        finally:
            self._clear_drag()

    def _clear_drag(self) -> None:
        self.active_card = None
        self.active_column = None
        self.over_column = None

    @staticmethod
    def _log_update_failure(future: Future, task_id: str) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error(f"Failed to update task {task_id}: {error}")

    def close(self) -> None:
        self.executor.shutdown(wait=True)

    def __str__(self) -> str:
        return ", ".join(f"{col.title}: {len(col.tasks)} tasks" for col in self.columns)
