"""HTTP/JSON location store client (retrying, error-mapping)."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote
import logging

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from weather_locations.config import AppConfig
from weather_locations.errors import NetworkError, ServerError
from weather_locations.models.location import LocationListPayload, LocationRecord
from weather_locations.store.base import LocationStore

logger = logging.getLogger(__name__)

_RETRY_STATUSES = (429, 500, 502, 503, 504)


def _truncate(text: str, n: int = 200) -> str:
    if len(text) <= n:
        return text
    return text[:n] + "..."


def _parse_body(response: Any) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def build_session(max_retries: int, backoff_factor: float) -> requests.Session:
    """Session that retries idempotent calls on transient failures.

    POST (add) is not retried, so a timeout cannot create a duplicate.
    """
    retry = Retry(
        total=max(0, int(max_retries)),
        backoff_factor=backoff_factor,
        status_forcelist=_RETRY_STATUSES,
        allowed_methods=frozenset({"GET", "PUT", "DELETE"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class HttpLocationStore(LocationStore):
    """Client for the location backend's REST API."""

    def __init__(self, config: AppConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.base_url = config.store.base_url.rstrip("/")
        if not self.base_url:
            raise ValueError("Missing store base_url (set LOCATION_STORE_URL or config store.base_url)")
        self.timeout = config.store.timeout_seconds
        self._session = session or build_session(config.store.max_retries, config.store.backoff_factor)

    @property
    def server_root(self) -> str:
        root = self.base_url
        if root.endswith("/api"):
            root = root[: -len("/api")]
        return root

    def _request(self, method: str, url: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.debug("%s %s %s", method, url, payload)
        try:
            response = self._session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"Network error: {exc}") from exc
        body = _parse_body(response)
        status = response.status_code
        if not 200 <= status < 300:
            message = body.get("error") or f"HTTP {status}"
            logger.warning("%s %s failed: %s", method, url, _truncate(str(message)))
            raise ServerError(str(message), status_code=status)
        return body

    @staticmethod
    def _message(body: Dict[str, Any], default: str) -> str:
        message = body.get("message")
        return str(message) if message else default

    def fetch_locations(self, user_id: str) -> List[LocationRecord]:
        body = self._request("GET", f"{self.base_url}/locations/{quote(user_id, safe='')}")
        try:
            payload = LocationListPayload.model_validate(body)
            return [row.to_record() for row in payload.locations]
        except ValidationError as exc:
            raise ServerError(f"Malformed location list: {_truncate(str(exc))}") from exc

    def add_location(
        self,
        user_id: str,
        name: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> str:
        payload: Dict[str, Any] = {"userId": user_id, "locationName": name}
        if latitude is not None:
            payload["latitude"] = latitude
        if longitude is not None:
            payload["longitude"] = longitude
        body = self._request("POST", f"{self.base_url}/locations", payload)
        return self._message(body, "Location added")

    def delete_location(self, user_id: str, name: str) -> str:
        payload = {"userId": user_id, "locationName": name}
        body = self._request("DELETE", f"{self.base_url}/locations", payload)
        return self._message(body, "Location deleted")

    def replace_order(self, user_id: str, ordered_names: Sequence[str]) -> str:
        payload = {"userId": user_id, "locations": list(ordered_names)}
        body = self._request("PUT", f"{self.base_url}/locations/order", payload)
        return self._message(body, "Location order updated")

    def health_check(self) -> bool:
        try:
            self._request("GET", f"{self.server_root}/health")
        except (NetworkError, ServerError) as exc:
            logger.warning("Health check failed: %s", exc)
            return False
        return True
