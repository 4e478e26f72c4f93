from pathlib import Path

import pytest

from weather_locations import cli
from weather_locations.models.location import LocationRecord
from weather_locations.store.memory import InMemoryLocationStore

CONFIG_YAML = """
app:
  name: test
  journal_dir: {journal}
store:
  provider: memory
session:
  user_id: alice
logging:
  level: WARNING
  log_jsonl: true
"""


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch) -> str:
    monkeypatch.setenv("DISABLE_DOTENV", "1")
    for key in ("LOCATION_STORE_URL", "LOCATION_STORE_PROVIDER", "WEATHER_USER_ID", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML.format(journal=tmp_path / "journal"), encoding="utf-8")
    return str(path)


@pytest.fixture
def seeded_store(monkeypatch) -> InMemoryLocationStore:
    store = InMemoryLocationStore({"alice": [LocationRecord(name=n) for n in ("A", "B", "C", "D")]})
    monkeypatch.setattr(cli, "build_store", lambda cfg, offline=False: store)
    return store


def test_list(config_path, seeded_store, capsys):
    assert cli.main(["--config", config_path, "list"]) == 0
    out = capsys.readouterr().out
    assert "0: A" in out
    assert "3: D" in out


def test_move_persists(config_path, seeded_store, capsys):
    assert cli.main(["--config", config_path, "move", "0", "bottom"]) == 0
    assert seeded_store.names("alice") == ["B", "C", "D", "A"]
    assert "Location order saved" in capsys.readouterr().out


def test_unavailable_move_fails(config_path, seeded_store):
    assert cli.main(["--config", config_path, "move", "0", "up"]) == 1
    assert seeded_store.names("alice") == ["A", "B", "C", "D"]


def test_drag_replays_targets(config_path, seeded_store):
    assert cli.main(["--config", config_path, "drag", "3", "2", "1", "0"]) == 0
    assert seeded_store.names("alice") == ["D", "A", "B", "C"]
    order_calls = [c for c in seeded_store.calls if c[0] == "replace_order"]
    assert len(order_calls) == 1


def test_add_and_delete(config_path, seeded_store, capsys):
    assert cli.main(["--config", config_path, "add", "Seoul", "--lat", "37.56", "--lon", "126.97"]) == 0
    assert seeded_store.names("alice")[-1] == "Seoul"
    assert cli.main(["--config", config_path, "delete", "Nowhere"]) == 1
    assert "[delete]" in capsys.readouterr().err


def test_user_required(config_path, seeded_store, tmp_path: Path):
    path = tmp_path / "nouser.yaml"
    path.write_text(Path(config_path).read_text(encoding="utf-8").replace("user_id: alice", "user_id: ''"), encoding="utf-8")
    assert cli.main(["--config", str(path), "list"]) == 2


def test_offline_health(config_path, capsys):
    assert cli.main(["--config", config_path, "--offline", "--user", "bob", "health"]) == 0
    assert "reachable" in capsys.readouterr().out
