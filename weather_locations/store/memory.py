"""In-memory location store for offline use and tests."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from weather_locations.errors import ServerError
from weather_locations.models.location import LocationRecord
from weather_locations.store.base import LocationStore


class InMemoryLocationStore(LocationStore):
    """Keeps each user's list in insertion/display order.

    ``calls`` records every operation as ``(method, user_id, payload)`` so
    tests can assert on what was sent.
    """

    def __init__(self, initial: Optional[Dict[str, List[LocationRecord]]] = None) -> None:
        self._lists: Dict[str, List[LocationRecord]] = {}
        for user_id, records in (initial or {}).items():
            self._lists[user_id] = list(records)
        self.calls: List[Tuple[str, str, object]] = []

    def fetch_locations(self, user_id: str) -> List[LocationRecord]:
        self.calls.append(("fetch_locations", user_id, None))
        return list(self._lists.get(user_id, []))

    def add_location(
        self,
        user_id: str,
        name: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> str:
        self.calls.append(("add_location", user_id, name))
        records = self._lists.setdefault(user_id, [])
        if any(record.name == name for record in records):
            raise ServerError(f"Location already saved: {name}", status_code=409)
        try:
            record = LocationRecord(name=name, latitude=latitude, longitude=longitude)
        except ValueError as exc:
            raise ServerError("userId and location are required", status_code=400) from exc
        records.append(record)
        return "Location added successfully"

    def delete_location(self, user_id: str, name: str) -> str:
        self.calls.append(("delete_location", user_id, name))
        records = self._lists.get(user_id, [])
        remaining = [record for record in records if record.name != name]
        if len(remaining) == len(records):
            raise ServerError(f"Location not found: {name}", status_code=404)
        self._lists[user_id] = remaining
        return "Location deleted successfully"

    def replace_order(self, user_id: str, ordered_names: Sequence[str]) -> str:
        names = list(ordered_names)
        self.calls.append(("replace_order", user_id, names))
        if not user_id or not names:
            raise ServerError("userId and locations array are required", status_code=400)
        records = self._lists.get(user_id, [])
        by_name = {record.name: record for record in records}
        listed: List[LocationRecord] = []
        for name in names:
            record = by_name.pop(name, None)
            if record is not None:
                listed.append(record)
        unlisted = [record for record in records if record.name in by_name]
        self._lists[user_id] = listed + unlisted
        return "Location order updated successfully"

    def names(self, user_id: str) -> List[str]:
        return [record.name for record in self._lists.get(user_id, [])]
