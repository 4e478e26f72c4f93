"""Store interface for a user's persisted, ordered location list."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from weather_locations.models.location import LocationRecord


class LocationStore(ABC):
    """Authoritative copy of each user's ordered locations.

    Failures raise ``NetworkError`` (unreachable) or ``ServerError``
    (rejected, with a user-facing message).
    """

    @abstractmethod
    def fetch_locations(self, user_id: str) -> List[LocationRecord]:
        raise NotImplementedError

    @abstractmethod
    def add_location(
        self,
        user_id: str,
        name: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> str:
        raise NotImplementedError

    @abstractmethod
    def delete_location(self, user_id: str, name: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def replace_order(self, user_id: str, ordered_names: Sequence[str]) -> str:
        raise NotImplementedError

    def health_check(self) -> bool:
        return True
