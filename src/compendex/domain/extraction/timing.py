"""Duration and casting-time phrases."""

from __future__ import annotations

import json
import logging

from compendex.domain.model import RecordField

from .text import pluralize, uppercase_first

log = logging.getLogger(__name__)


class UnknownDurationError(ValueError):
    """Raised for a duration segment whose shape is not recognized."""

    def __init__(self, segment: object) -> None:
        self.segment = segment
        super().__init__(f"Unrecognized duration segment: {_payload(segment)}")


def _segments(value: object) -> list[object]:
    if isinstance(value, list):
        return list(value)
    if value:
        return [value]
    return []


def _payload(segment: object) -> str:
    try:
        return json.dumps(segment, sort_keys=True)
    except (TypeError, ValueError):
        return repr(segment)


def _timed_phrase(segment: object) -> str:
    duration = RecordField.DURATION.mapping_from(segment)
    amount = RecordField.AMOUNT.int_from(duration)
    unit = RecordField.TYPE.text_from(duration)
    if amount is None or unit is None:
        raise UnknownDurationError(segment)
    return f"{amount} {pluralize(unit, amount)}"


def duration_segment(segment: object) -> str:
    """Render one duration segment; raises :class:`UnknownDurationError`."""

    match RecordField.TYPE.text_or_empty(segment):
        case "instant":
            return "Instantaneous"
        case "permanent":
            if len(RecordField.ENDS.list_from(segment)) > 1:
                return "Until dispelled or triggered"
            return "Until dispelled"
        case "special":
            return "Special"
        case "timed":
            phrase = _timed_phrase(segment)
            if RecordField.CONCENTRATION.bool_from(segment):
                return f"Concentration, up to {phrase}"
            return phrase
        case _:
            raise UnknownDurationError(segment)


def spell_duration(segments: object) -> str | None:
    """Render the first one or two duration segments.

    Unrecognized segments are logged with their payload and yield ``None``
    for the whole duration.
    """

    items = _segments(segments)
    if not items:
        return None
    try:
        result = duration_segment(items[0])
        if len(items) > 1:
            second = items[1]
            prefix = "up to " if RecordField.TYPE.text_from(second) == "timed" else ""
            result = f"{result}, {prefix}{duration_segment(second)}"
    except UnknownDurationError as exc:
        log.error("%s", exc)
        return None
    return result


def casting_time(times: object) -> str | None:
    """Render the first casting-time segment (``1 Bonus Action``, ``10 minutes``)."""

    items = _segments(times)
    if not items:
        return None
    segment = items[0]
    number = RecordField.NUMBER.int_from(segment)
    unit = RecordField.UNIT.text_from(segment)
    if number is None or unit is None:
        return None
    match unit:
        case "action" | "reaction":
            label = uppercase_first(unit)
        case "bonus":
            label = "Bonus Action"
        case _:
            label = unit
    phrase = pluralize(f"{number} {label}", number)
    condition = RecordField.CONDITION.text_from(segment)
    if condition:
        phrase = f"{phrase}, {condition}"
    return phrase
