import pytest

from weather_locations.engine.ordered_list import OrderedLocationList
from weather_locations.errors import InvalidPosition
from weather_locations.models.location import LocationRecord, MoveIntent


def make_records(*names: str) -> list[LocationRecord]:
    return [LocationRecord(name=name) for name in names]


def test_replace_all_notifies_with_names():
    seen = []
    locations = OrderedLocationList()
    locations.subscribe(seen.append)
    locations.replace_all(make_records("Seoul", "Busan"))
    assert locations.names() == ["Seoul", "Busan"]
    assert seen == [["Seoul", "Busan"]]


def test_duplicate_names_rejected_and_list_unchanged():
    locations = OrderedLocationList(make_records("X", "Y"))
    with pytest.raises(ValueError):
        locations.replace_all(make_records("A", "A"))
    assert locations.names() == ["X", "Y"]


def test_names_are_case_sensitive_identities():
    locations = OrderedLocationList(make_records("seoul", "Seoul"))
    assert locations.index_of("Seoul") == 1
    assert locations.index_of("SEOUL") is None


def test_apply_move_and_relocate():
    locations = OrderedLocationList(make_records("A", "B", "C", "D"))
    locations.apply_move(0, MoveIntent.BOTTOM)
    assert locations.names() == ["B", "C", "D", "A"]
    locations.relocate(3, 0)
    assert locations.names() == ["A", "B", "C", "D"]


def test_invalid_move_leaves_list_and_listeners_untouched():
    seen = []
    locations = OrderedLocationList(make_records("A", "B"))
    locations.subscribe(seen.append)
    with pytest.raises(InvalidPosition):
        locations.apply_move(0, MoveIntent.UP)
    with pytest.raises(InvalidPosition):
        locations.relocate(0, 5)
    assert locations.names() == ["A", "B"]
    assert seen == []


def test_relocate_to_same_index_does_not_notify():
    seen = []
    locations = OrderedLocationList(make_records("A", "B"))
    locations.subscribe(seen.append)
    locations.relocate(1, 1)
    assert seen == []


def test_unsubscribe_stops_notifications():
    seen = []
    locations = OrderedLocationList(make_records("A", "B"))
    locations.subscribe(seen.append)
    locations.unsubscribe(seen.append)
    locations.relocate(0, 1)
    assert seen == []
