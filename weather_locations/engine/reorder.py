"""Pure reorder operations for position-significant lists.

Every function takes a sequence and returns a new list; the input is never
modified. Indices are validated against the current length before anything
moves, and a bad index raises ``InvalidPosition``.
"""
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple, TypeVar

from weather_locations.errors import InvalidPosition, MoveNotApplicable
from weather_locations.models.location import MoveIntent

T = TypeVar("T")

MOVE_LABELS: Dict[MoveIntent, str] = {
    MoveIntent.UP: "Move up",
    MoveIntent.DOWN: "Move down",
    MoveIntent.TOP: "Move to top",
    MoveIntent.BOTTOM: "Move to bottom",
}


def check_index(items: Sequence[T], index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidPosition(index, len(items), "index must be an int")
    if not 0 <= index < len(items):
        raise InvalidPosition(index, len(items))


def _swap(items: List[T], a: int, b: int) -> None:
    items[a], items[b] = items[b], items[a]


def move_up(items: Sequence[T], index: int) -> List[T]:
    check_index(items, index)
    if index == 0:
        raise InvalidPosition(index, len(items), "first element cannot move up")
    result = list(items)
    _swap(result, index - 1, index)
    return result


def move_down(items: Sequence[T], index: int) -> List[T]:
    check_index(items, index)
    if index == len(items) - 1:
        raise InvalidPosition(index, len(items), "last element cannot move down")
    result = list(items)
    _swap(result, index, index + 1)
    return result


def move_to_top(items: Sequence[T], index: int) -> List[T]:
    check_index(items, index)
    result = list(items)
    result.insert(0, result.pop(index))
    return result


def move_to_bottom(items: Sequence[T], index: int) -> List[T]:
    check_index(items, index)
    result = list(items)
    result.append(result.pop(index))
    return result


def relocate(items: Sequence[T], source: int, target: int) -> List[T]:
    """Move the element at ``source`` so it ends at ``target``.

    Walks one step at a time swapping neighbours, so only the elements
    between the two positions shift, each by exactly one.
    """
    check_index(items, source)
    check_index(items, target)
    result = list(items)
    step = 1 if target > source else -1
    for pos in range(source, target, step):
        _swap(result, pos, pos + step)
    return result


def available_moves(index: int, length: int) -> Tuple[MoveIntent, ...]:
    """Return the discrete moves offered for the row at ``index``.

    Raises ``MoveNotApplicable`` for a single-element list, where no move
    makes sense.
    """
    if length == 1 and index == 0:
        raise MoveNotApplicable("a single location cannot be reordered")
    if length <= 0 or not 0 <= index < length:
        raise InvalidPosition(index, max(length, 0))
    if index == 0:
        return (MoveIntent.DOWN, MoveIntent.BOTTOM)
    if index == length - 1:
        return (MoveIntent.UP, MoveIntent.TOP)
    return (MoveIntent.UP, MoveIntent.DOWN, MoveIntent.TOP, MoveIntent.BOTTOM)


_MOVES = {
    MoveIntent.UP: move_up,
    MoveIntent.DOWN: move_down,
    MoveIntent.TOP: move_to_top,
    MoveIntent.BOTTOM: move_to_bottom,
}


def apply_move(items: Sequence[T], index: int, intent: MoveIntent | str) -> List[T]:
    """Apply a menu move, rejecting moves the menu would not offer."""
    intent = MoveIntent(intent)
    if intent not in available_moves(index, len(items)):
        raise InvalidPosition(index, len(items), f"{intent.value} is not offered here")
    return _MOVES[intent](items, index)
