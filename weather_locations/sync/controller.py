"""Load / reorder / persist orchestration for one user's location list."""
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple
import logging

from weather_locations.engine.drag import DragSession, StartDragHook
from weather_locations.engine.ordered_list import OrderedLocationList, SequenceListener
from weather_locations.engine.reorder import available_moves
from weather_locations.errors import InvalidPosition, MoveNotApplicable, ServerError, StoreError
from weather_locations.models.location import LocationRecord, MoveIntent, Notice
from weather_locations.persistence.journal import append_commit_log, make_commit_record, validate_user_id
from weather_locations.store.base import LocationStore
from weather_locations.sync.worker import InlineWorker, Worker

logger = logging.getLogger(__name__)

NoticeListener = Callable[[Notice], None]


def _describe(exc: StoreError) -> str:
    if isinstance(exc, ServerError):
        return exc.message
    return str(exc) or exc.__class__.__name__


class ListSyncController:
    """Keeps the on-screen order and the store in step.

    Reorders are applied locally first and then committed as the full list of
    names (last write wins). Adds and deletes go to the store first and are
    followed by a reload. Store failures become notices; the local order is
    never rolled back.
    """

    def __init__(
        self,
        store: LocationStore,
        user_id: str,
        worker: Optional[Worker] = None,
        journal_root: Optional[Path] = None,
        start_drag: Optional[StartDragHook] = None,
    ) -> None:
        if not user_id:
            raise ValueError("user_id must not be empty")
        if journal_root is not None:
            validate_user_id(user_id)
        self.store = store
        self.user_id = user_id
        self.worker = worker or InlineWorker()
        self.journal_root = journal_root
        self.locations = OrderedLocationList()
        self.drag = DragSession(self.locations, on_commit=self.apply_drag_commit, start_drag=start_drag)
        self.notices: List[Notice] = []
        self._notice_listeners: List[NoticeListener] = []

    # View-facing API

    def current_sequence(self) -> List[str]:
        return self.locations.names()

    def records(self) -> List[LocationRecord]:
        return self.locations.records()

    def subscribe(self, listener: SequenceListener) -> None:
        self.locations.subscribe(listener)

    def unsubscribe(self, listener: SequenceListener) -> None:
        self.locations.unsubscribe(listener)

    def subscribe_notices(self, listener: NoticeListener) -> None:
        if listener not in self._notice_listeners:
            self._notice_listeners.append(listener)

    def available_moves(self, index: int) -> Tuple[MoveIntent, ...]:
        """Moves the menu should offer for a row; empty when none apply."""
        try:
            return available_moves(index, len(self.locations))
        except MoveNotApplicable:
            return ()
        except InvalidPosition as exc:
            logger.warning("No move menu for row: %s", exc)
            return ()

    def request_move(self, source_index: int, intent: MoveIntent | str) -> bool:
        return self.apply_discrete_move(source_index, intent)

    def begin_drag(self, source_index: int, on_handle: bool = True) -> bool:
        try:
            return self.drag.begin(source_index, on_handle=on_handle)
        except InvalidPosition as exc:
            logger.warning("Dropped drag start: %s", exc)
            return False

    def report_drag_over(self, target_index: int) -> None:
        try:
            self.drag.report_over(target_index)
        except InvalidPosition as exc:
            logger.warning("Dropped drag-over: %s", exc)

    def end_drag(self, cancelled: bool = False) -> Optional[List[str]]:
        return self.drag.end(cancelled=cancelled)

    # Operations

    def load(self) -> None:
        user_id = self.user_id
        self.worker.submit(
            lambda: self.store.fetch_locations(user_id),
            self._on_loaded,
            lambda exc: self._emit("error", "load", f"Failed to load locations: {_describe(exc)}"),
        )

    def apply_discrete_move(self, source_index: int, intent: MoveIntent | str) -> bool:
        if self.drag.active:
            logger.warning("Dropped %s move at %s: drag in progress", intent, source_index)
            return False
        try:
            self.locations.apply_move(source_index, MoveIntent(intent))
        except (InvalidPosition, MoveNotApplicable, ValueError) as exc:
            logger.warning("Dropped %s move at %s: %s", intent, source_index, exc)
            return False
        self._commit(self.locations.names(), "move")
        return True

    def apply_drag_commit(self, final_sequence: Sequence[str]) -> None:
        self._commit(list(final_sequence), "drag")

    def add_location(
        self,
        name: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> bool:
        name = (name or "").strip()
        if not name:
            self._emit("error", "add", "Location name must not be empty")
            return False
        user_id = self.user_id
        self.worker.submit(
            lambda: self.store.add_location(user_id, name, latitude, longitude),
            lambda message: self._after_structural_change("add", message),
            lambda exc: self._emit("error", "add", _describe(exc)),
        )
        return True

    def delete_location(self, name: str) -> None:
        user_id = self.user_id
        self.worker.submit(
            lambda: self.store.delete_location(user_id, name),
            lambda message: self._after_structural_change("delete", message),
            lambda exc: self._emit("error", "delete", _describe(exc)),
        )

    def check_health(self) -> None:
        def on_result(healthy: bool) -> None:
            if healthy:
                self._emit("info", "health", "Location store is reachable")
            else:
                self._emit("error", "health", "Location store is not reachable")

        self.worker.submit(
            self.store.health_check,
            on_result,
            lambda exc: self._emit("error", "health", _describe(exc)),
        )

    # Result handlers (UI thread)

    def _on_loaded(self, records: List[LocationRecord]) -> None:
        try:
            self.locations.replace_all(records)
        except ValueError as exc:
            self._emit("error", "load", f"Failed to load locations: {exc}")
            return
        self.drag.resync()

    def _after_structural_change(self, operation: str, message: str) -> None:
        self._emit("info", operation, message)
        self.load()

    def _commit(self, names: List[str], source: str) -> None:
        names = list(names)
        user_id = self.user_id
        logger.debug("Committing order for %s (%s): %s", user_id, source, names)
        self.worker.submit(
            lambda: self.store.replace_order(user_id, names),
            lambda message: self._on_committed(names, source, True, message),
            lambda exc: self._on_committed(names, source, False, _describe(exc)),
        )

    def _on_committed(self, names: List[str], source: str, ok: bool, message: str) -> None:
        if self.journal_root is not None:
            record = make_commit_record(self.user_id, source, names, ok, message)
            append_commit_log(self.user_id, record, self.journal_root)
        if ok:
            self._emit("info", "commit", "Location order saved")
        else:
            self._emit("error", "commit", f"Failed to save order: {message}")

    def _emit(self, level: str, operation: str, message: str) -> None:
        notice = Notice(level=level, operation=operation, message=message)
        if level == "error":
            logger.warning("%s: %s", operation, message)
        self.notices.append(notice)
        for listener in list(self._notice_listeners):
            listener(notice)
