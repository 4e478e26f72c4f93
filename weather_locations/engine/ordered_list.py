"""In-memory ordered list of the current user's saved locations."""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

from weather_locations.engine.reorder import apply_move, relocate
from weather_locations.models.location import LocationRecord, MoveIntent

SequenceListener = Callable[[List[str]], None]


class OrderedLocationList:
    """Position-significant sequence of ``LocationRecord`` with change listeners.

    Listeners receive the full list of names after every change.
    """

    def __init__(self, records: Iterable[LocationRecord] = ()) -> None:
        self._records: List[LocationRecord] = []
        self._listeners: List[SequenceListener] = []
        records = list(records)
        if records:
            self._records = self._checked(records)

    @staticmethod
    def _checked(records: Sequence[LocationRecord]) -> List[LocationRecord]:
        seen = set()
        for record in records:
            if record.name in seen:
                raise ValueError(f"duplicate location name: {record.name}")
            seen.add(record.name)
        return list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))

    def __getitem__(self, index: int) -> LocationRecord:
        return self._records[index]

    def records(self) -> List[LocationRecord]:
        return list(self._records)

    def names(self) -> List[str]:
        return [record.name for record in self._records]

    def index_of(self, name: str) -> Optional[int]:
        for idx, record in enumerate(self._records):
            if record.name == name:
                return idx
        return None

    def subscribe(self, listener: SequenceListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SequenceListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def replace_all(self, records: Sequence[LocationRecord]) -> None:
        """Replace the whole list (a load). Duplicates leave it unchanged."""
        self._records = self._checked(records)
        self._notify()

    def apply_move(self, index: int, intent: MoveIntent) -> None:
        self._records = apply_move(self._records, index, intent)
        self._notify()

    def relocate(self, source: int, target: int) -> None:
        moved = relocate(self._records, source, target)
        if source == target:
            return
        self._records = moved
        self._notify()

    def _notify(self) -> None:
        names = self.names()
        for listener in list(self._listeners):
            listener(list(names))
