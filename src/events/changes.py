"""Change tracker: which tracked fields an update patch actually changes."""

from datetime import datetime
from typing import Any

from pydantic.alias_generators import to_camel

from src.events.dtos import TRACKED_FIELDS, ChangeDTO, ChangeType, EventDTO, EventFieldsDTO, to_utc

_CHANGE_TYPES = {
    "start_date": ChangeType.START_TIME_CHANGED,
    "end_date": ChangeType.END_TIME_CHANGED,
}


def _instants_differ(old: datetime | None, new: datetime | None) -> bool:
    if old is None or new is None:
        return old is not new
    return to_utc(old) != to_utc(new)


def _differs(name: str, old: Any, new: Any) -> bool:
    if name in ("start_date", "end_date"):
        return _instants_differ(old, new)
    if name == "guests":
        return tuple(old or ()) != tuple(new or ())
    # location and recurring are frozen models: == is a deep comparison
    return old != new


def diff(original: EventDTO, patch: EventFieldsDTO) -> list[ChangeDTO]:
    """List the changes ``patch`` makes to ``original``.

    Fields absent from the patch are unchanged. Dates compare as instants, so
    re-encoding the same moment in another offset is not a change. Output
    follows TRACKED_FIELDS order.
    """
    updates = patch.set_fields()
    changes = []
    for name in TRACKED_FIELDS:
        if name not in updates:
            continue
        old_value = getattr(original, name)
        new_value = updates[name]
        if not _differs(name, old_value, new_value):
            continue
        field = to_camel(name)
        changes.append(
            ChangeDTO(
                field=field,
                old_value=old_value,
                new_value=new_value,
                change_type=_CHANGE_TYPES.get(name) or ChangeType(f"{field}_changed"),
            )
        )
    return changes
