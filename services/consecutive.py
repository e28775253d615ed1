"""Advisory check that a slot selection forms one unbroken run of hours.

Non-adjacent selections are allowed; the caller only asks the user to
confirm before adding a slot that would break the run. Reservation never
consults this module.
"""
from collections import namedtuple
from typing import Callable, Iterable, List, Sequence

from services.pricing import minutes_of_day

SelectionAdvice = namedtuple("SelectionAdvice", ["selection", "contiguous", "requires_confirmation"])

NOT_CONSECUTIVE_MESSAGE = "The selected slots are not consecutive. Add this slot anyway?"


def _ordered(selected_ids: Iterable[str], slots: Sequence) -> List:
    by_id = {s.id: s for s in slots}
    chosen = [by_id[slot_id] for slot_id in selected_ids if slot_id in by_id]
    return sorted(chosen, key=lambda s: minutes_of_day(s.start_time))


def is_contiguous(selected_ids: Iterable[str], slots: Sequence) -> bool:
    ordered = _ordered(selected_ids, slots)
    for prev, cur in zip(ordered, ordered[1:]):
        if minutes_of_day(cur.start_time) != minutes_of_day(prev.end_time, is_end=True):
            return False
    return True


def advise_toggle(selection: Sequence[str], slot_id: str, slots: Sequence) -> SelectionAdvice:
    selection = list(selection)
    if slot_id in selection:
        remaining = [s for s in selection if s != slot_id]
        return SelectionAdvice(remaining, is_contiguous(remaining, slots), False)

    proposed = selection + [slot_id]
    contiguous = is_contiguous(proposed, slots)
    return SelectionAdvice(proposed, contiguous, not contiguous)


def toggle_slot(
    selection: Sequence[str],
    slot_id: str,
    slots: Sequence,
    confirm: Callable[[str], bool],
) -> List[str]:
    """
    Adds or removes slot_id. If adding it would break the run, ``confirm`` is
    called with a prompt; declining leaves the selection as it was.
    """
    advice = advise_toggle(selection, slot_id, slots)
    if advice.requires_confirmation and not confirm(NOT_CONSECUTIVE_MESSAGE):
        return list(selection)
    return advice.selection
