"""Drag-to-reorder gesture state machine."""
from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional
import logging

from weather_locations.engine.ordered_list import OrderedLocationList
from weather_locations.engine.reorder import check_index

logger = logging.getLogger(__name__)

CommitHandler = Callable[[List[str]], None]
StartDragHook = Callable[[int], None]


class DragState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    DRAGGING = "dragging"


class DragSession:
    """Tracks one pointer-driven reorder gesture over an ``OrderedLocationList``.

    Every drag-over report relocates the moving row immediately so the view
    follows the pointer. Nothing is persisted until the gesture ends; ending
    (dropped or cancelled) emits exactly one commit with the final names.
    There is no rollback once a relocation has been applied.
    """

    def __init__(
        self,
        locations: OrderedLocationList,
        on_commit: CommitHandler,
        start_drag: Optional[StartDragHook] = None,
    ) -> None:
        self.locations = locations
        self.on_commit = on_commit
        self.start_drag = start_drag
        self.state = DragState.IDLE
        self.source: Optional[int] = None
        self.dragged_name: Optional[str] = None
        self.moves_applied = 0

    @property
    def active(self) -> bool:
        return self.state is not DragState.IDLE

    @property
    def swipe_enabled(self) -> bool:
        # Rows are reorder-only; swipe-to-dismiss is never offered.
        return False

    def begin(self, source_index: int, on_handle: bool = True) -> bool:
        """Press on a row. Only a press on the drag handle starts a gesture."""
        if self.active:
            logger.info("Ignoring drag start at %s: gesture already in progress", source_index)
            return False
        if not on_handle:
            return False
        check_index(self.locations.records(), source_index)
        self.state = DragState.ARMED
        self.source = source_index
        self.dragged_name = self.locations[source_index].name
        self.moves_applied = 0
        if self.start_drag is not None:
            try:
                self.start_drag(source_index)
            except Exception:
                self._reset()
                raise
        self.state = DragState.DRAGGING
        return True

    def resync(self) -> None:
        """Re-find the dragged row after the list was replaced underneath us.

        If the row is gone the gesture is abandoned without a commit.
        """
        if not self.active or self.dragged_name is None:
            return
        index = self.locations.index_of(self.dragged_name)
        if index is None:
            logger.info("Dragged row %r disappeared on reload; abandoning gesture", self.dragged_name)
            self._reset()
            return
        self.source = index

    def _reset(self) -> None:
        self.state = DragState.IDLE
        self.source = None
        self.dragged_name = None

    def report_over(self, target_index: int) -> None:
        """The dragged row is now over ``target_index``."""
        if self.state is not DragState.DRAGGING or self.source is None:
            logger.debug("Drag-over %s ignored in state %s", target_index, self.state.value)
            return
        if target_index == self.source:
            return
        self.locations.relocate(self.source, target_index)
        self.source = target_index
        self.moves_applied += 1

    def end(self, cancelled: bool = False) -> Optional[List[str]]:
        """Release or cancel the gesture and commit the resulting order once."""
        if not self.active:
            return None
        self._reset()
        final = self.locations.names()
        if cancelled:
            logger.debug("Drag cancelled after %d relocation(s); committing current order", self.moves_applied)
        self.on_commit(final)
        return final
