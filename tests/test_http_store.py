from dataclasses import replace

import pytest
import requests

from weather_locations.config import load_config
from weather_locations.errors import NetworkError, ServerError
from weather_locations.store.http import HttpLocationStore, build_session


class FakeResponse:
    def __init__(self, status_code: int, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no json body")
        return self._body


class FakeSession:
    """Stands in for requests.Session, replaying queued responses."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, json=None, timeout=None):
        self.requests.append({"method": method, "url": url, "json": json, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_store(responses, base_url: str = "http://localhost:3000/api"):
    cfg = load_config("configs/config.yaml")
    cfg = replace(cfg, store=replace(cfg.store, base_url=base_url))
    session = FakeSession(responses)
    return HttpLocationStore(cfg, session=session), session


def test_fetch_locations_parses_rows():
    body = {
        "success": True,
        "locations": [
            {"id": 1, "user_id": "alice", "location_name": "Seoul", "latitude": 37.56, "longitude": 126.97, "display_order": 0},
            {"id": 2, "user_id": "alice", "location_name": "Busan", "latitude": None, "longitude": None, "display_order": 1},
        ],
    }
    store, session = make_store([FakeResponse(200, body)])
    records = store.fetch_locations("alice")
    assert [r.name for r in records] == ["Seoul", "Busan"]
    assert records[0].latitude == pytest.approx(37.56)
    assert records[1].longitude is None
    assert session.requests[0]["method"] == "GET"
    assert session.requests[0]["url"] == "http://localhost:3000/api/locations/alice"


def test_fetch_quotes_user_id():
    store, session = make_store([FakeResponse(200, {"locations": []})])
    store.fetch_locations("a b/c")
    assert session.requests[0]["url"].endswith("/locations/a%20b%2Fc")


def test_fetch_malformed_rows_is_server_error():
    store, _session = make_store([FakeResponse(200, {"locations": [{"latitude": 1.0}]})])
    with pytest.raises(ServerError):
        store.fetch_locations("alice")


def test_replace_order_sends_full_name_list():
    store, session = make_store([FakeResponse(200, {"success": True, "message": "Location order updated successfully"})])
    message = store.replace_order("alice", ("D", "A", "B", "C"))
    assert message == "Location order updated successfully"
    sent = session.requests[0]
    assert sent["method"] == "PUT"
    assert sent["url"] == "http://localhost:3000/api/locations/order"
    assert sent["json"] == {"userId": "alice", "locations": ["D", "A", "B", "C"]}


def test_add_location_omits_missing_coordinates():
    store, session = make_store([FakeResponse(200, {"message": "added"}), FakeResponse(200, {"message": "added"})])
    store.add_location("alice", "Seoul")
    store.add_location("alice", "Busan", 35.1, 129.0)
    assert session.requests[0]["json"] == {"userId": "alice", "locationName": "Seoul"}
    assert session.requests[1]["json"] == {"userId": "alice", "locationName": "Busan", "latitude": 35.1, "longitude": 129.0}


def test_delete_location_uses_body():
    store, session = make_store([FakeResponse(200, {})])
    assert store.delete_location("alice", "Seoul") == "Location deleted"
    assert session.requests[0]["method"] == "DELETE"
    assert session.requests[0]["json"] == {"userId": "alice", "locationName": "Seoul"}


def test_error_body_becomes_server_error_message():
    store, _session = make_store([FakeResponse(400, {"success": False, "error": "userId and locations array are required"})])
    with pytest.raises(ServerError) as excinfo:
        store.replace_order("alice", ["A"])
    assert excinfo.value.message == "userId and locations array are required"
    assert excinfo.value.status_code == 400


def test_error_without_json_falls_back_to_status():
    store, _session = make_store([FakeResponse(502, None)])
    with pytest.raises(ServerError) as excinfo:
        store.fetch_locations("alice")
    assert excinfo.value.message == "HTTP 502"


def test_transport_failure_is_network_error():
    store, _session = make_store([requests.ConnectionError("refused")])
    with pytest.raises(NetworkError):
        store.replace_order("alice", ["A"])


def test_health_check_uses_server_root():
    store, session = make_store([FakeResponse(200, {"status": "OK"}), requests.Timeout("slow")])
    assert store.health_check() is True
    assert session.requests[0]["url"] == "http://localhost:3000/health"
    assert store.health_check() is False


def test_missing_base_url_rejected():
    cfg = load_config("configs/config.yaml")
    cfg = replace(cfg, store=replace(cfg.store, base_url=""))
    with pytest.raises(ValueError):
        HttpLocationStore(cfg, session=FakeSession([]))


def test_build_session_mounts_retrying_adapter():
    session = build_session(max_retries=3, backoff_factor=0.1)
    adapter = session.get_adapter("http://localhost:3000/api")
    assert adapter.max_retries.total == 3
    assert "POST" not in adapter.max_retries.allowed_methods
