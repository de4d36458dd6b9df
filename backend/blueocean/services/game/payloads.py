"""Typed views of the loose JSON payloads clients send.

Clients are browsers running hand-written forms, so nothing about a
payload is trusted: missing keys fall back to defaults, ids that don't
parse become None (and later fail the team lookup), numeric deltas that
don't parse count as zero, and text is cut to the field limit instead of
being rejected. A payload that is not an object at all, or a text field
holding something other than a string, raises MalformedPayload so the
action is dropped before anything changes.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import math

from .exceptions import MalformedPayload

TEAM_NAME_MAX = 24
CUSTOMER_MAX = 80
PAIN_MAX = 120
WHO_MAX = 60
PROBLEM_MAX = 80
BY_MAX = 80
PIVOT_MAX = 140
BLUE_MOVE_MAX = 60


def as_dict(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedPayload(f"expected an object, got {type(data).__name__}")
    return data


def to_int(value: Any) -> Optional[int]:
    """Parse an integral number from an int, float or numeric string.

    Returns None for anything else, including booleans, blanks, NaN and
    non-integral numbers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return None
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
    return None


def to_delta(value: Any) -> int:
    parsed = to_int(value)
    return parsed if parsed is not None else 0


def as_text(value: Any) -> str:
    # Blank-ish values (None, 0, False) read as empty; anything else must be a string
    if isinstance(value, str):
        return value
    if value:
        raise MalformedPayload(f"expected text, got {type(value).__name__}")
    return ''


def clip_text(value: Any, limit: int) -> str:
    return as_text(value)[:limit]


@dataclass
class JoinTeam:
    team_id: Optional[int] = None
    team_name: str = ''

    @classmethod
    def from_payload(cls, data):
        data = as_dict(data)
        name = as_text(data.get('teamName')).strip()[:TEAM_NAME_MAX]
        return cls(team_id=to_int(data.get('teamId')), team_name=name)


@dataclass
class PhaseA:
    customer: str = ''
    pain: str = ''

    @classmethod
    def from_payload(cls, data):
        data = as_dict(data)
        return cls(
            customer=clip_text(data.get('customer'), CUSTOMER_MAX),
            pain=clip_text(data.get('pain'), PAIN_MAX),
        )


@dataclass
class PhaseB:
    who: str = ''
    problem: str = ''
    by: str = ''

    @classmethod
    def from_payload(cls, data):
        data = as_dict(data)
        return cls(
            who=clip_text(data.get('who'), WHO_MAX),
            problem=clip_text(data.get('problem'), PROBLEM_MAX),
            by=clip_text(data.get('by'), BY_MAX),
        )


@dataclass
class PhaseC:
    pivot: str = ''

    @classmethod
    def from_payload(cls, data):
        return cls(pivot=clip_text(as_dict(data).get('pivot'), PIVOT_MAX))


@dataclass
class PhaseD:
    blue_move: str = ''

    @classmethod
    def from_payload(cls, data):
        return cls(blue_move=clip_text(as_dict(data).get('blueMove'), BLUE_MOVE_MAX))


@dataclass
class Vote:
    # Raw values are kept for the vote snapshot; parsed ids drive scoring
    value_team: Any = None
    diff_team: Any = None
    red_ocean_team: Any = None

    @classmethod
    def from_payload(cls, data):
        data = as_dict(data)
        return cls(
            value_team=data.get('valueTeam'),
            diff_team=data.get('diffTeam'),
            red_ocean_team=data.get('redOceanTeam'),
        )


@dataclass
class SetPhase:
    phase: Any = None

    @classmethod
    def from_payload(cls, data):
        return cls(phase=as_dict(data).get('phase'))


@dataclass
class DrawRandom:
    type: Any = None

    @classmethod
    def from_payload(cls, data):
        return cls(type=as_dict(data).get('type'))


@dataclass
class AdjustScore:
    team_id: Optional[int] = None
    delta_value: int = 0
    delta_comp: int = 0
    delta_diff: int = 0

    @classmethod
    def from_payload(cls, data):
        data = as_dict(data)
        return cls(
            team_id=to_int(data.get('teamId')),
            delta_value=to_delta(data.get('deltaValue')),
            delta_comp=to_delta(data.get('deltaComp')),
            delta_diff=to_delta(data.get('deltaDiff')),
        )
