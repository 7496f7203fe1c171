"""Copy-on-write edits of the performed sets in a session draft.

Both functions return a new items tuple and never touch their input. Only the
edited item is replaced; its siblings are carried over as the same objects so
callers can detect changes by identity.
"""

from __future__ import annotations

from typing import Sequence

from models import PerformedSet, SessionItem

DEFAULT_REPS = 10
EDITABLE_FIELDS = frozenset({"weight", "reps", "rpe"})


def add_performed_set(
    items: Sequence[SessionItem], item_index: int, default_reps: int = DEFAULT_REPS
) -> tuple[SessionItem, ...]:
    """Append a set to ``items[item_index]``.

    The new set is numbered after the existing ones, weighs 0 and takes the
    item's target reps (``default_reps`` when no target is set).
    """
    if not 0 <= item_index < len(items):
        return tuple(items)
    item = items[item_index]
    new_set = PerformedSet(
        set_number=len(item.performed_sets) + 1,
        weight=0,
        reps=item.target_reps or default_reps,
    )
    updated = item.model_copy(
        update={"performed_sets": (*item.performed_sets, new_set)}
    )
    result = list(items)
    result[item_index] = updated
    return tuple(result)


def update_performed_set(
    items: Sequence[SessionItem],
    item_index: int,
    set_index: int,
    field: str,
    value,
) -> tuple[SessionItem, ...]:
    """Replace one field of one performed set.

    Out-of-range indices leave the items unchanged.
    """
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"field {field!r} cannot be edited")
    if not 0 <= item_index < len(items):
        return tuple(items)
    item = items[item_index]
    if not 0 <= set_index < len(item.performed_sets):
        return tuple(items)
    sets = list(item.performed_sets)
    sets[set_index] = sets[set_index].model_copy(update={field: value})
    result = list(items)
    result[item_index] = item.model_copy(update={"performed_sets": tuple(sets)})
    return tuple(result)
