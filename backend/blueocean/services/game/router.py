"""Inbound action handling for the live session.

The router is the only writer of the GameSession. Every action runs to
completion under one lock, then the fresh public projection is handed
back to the transport, which broadcasts it outside the lock so a slow
client never holds up the next action.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import random
import threading
import time

from . import payloads
from .decks import CUSTOMER_CARDS, EVENT_CARDS, PAIN_CARDS
from .exceptions import (
    ActionIgnored,
    InvalidPhase,
    TeamNotActive,
    TeamNotBound,
    UnknownDrawType,
    UnknownEvent,
    UnknownTeam,
)
from .scoring import adjust_score, apply_audience_vote, apply_blue_move, apply_wehelp_bonus
from .state import AudienceVotes, GameSession, Phase, Team, WeHelp
from .visibility import public_state

logger = logging.getLogger(__name__)

# Wire names, shared with the browser clients
JOIN_TEAM = 'joinTeam'
JOIN_AUDIENCE = 'joinAudience'
JOIN_FACILITATOR = 'joinFacilitator'
SUBMIT_PHASE_A = 'submitPhaseA'
SUBMIT_PHASE_B = 'submitPhaseB'
SUBMIT_PHASE_C = 'submitPhaseC'
SUBMIT_PHASE_D = 'submitPhaseD'
VOTE = 'vote'
SET_PHASE = 'facilitator:setPhase'
NEXT_ROUND = 'facilitator:nextRound'
DRAW_RANDOM = 'facilitator:drawRandom'
ADJUST_SCORE = 'facilitator:adjustScore'

EVENTS = (
    JOIN_TEAM,
    JOIN_AUDIENCE,
    JOIN_FACILITATOR,
    SUBMIT_PHASE_A,
    SUBMIT_PHASE_B,
    SUBMIT_PHASE_C,
    SUBMIT_PHASE_D,
    VOTE,
    SET_PHASE,
    NEXT_ROUND,
    DRAW_RANDOM,
    ADJUST_SCORE,
)


class Role(str, Enum):
    UNASSIGNED = 'unassigned'
    TEAM = 'team'
    AUDIENCE = 'audience'
    FACILITATOR = 'facilitator'


@dataclass
class Connection:
    sid: str
    role: Role = Role.UNASSIGNED
    team_id: Optional[int] = None


Reply = Tuple[str, Any]


@dataclass
class Outcome:
    """What the transport must deliver after an action.

    ``replies`` go to the sender only. ``state`` is the projection to
    broadcast to everyone; None means the action was dropped. ``version``
    counts accepted actions, so a transport can drop a projection that a
    newer one has already overtaken.
    """
    replies: List[Reply] = field(default_factory=list)
    state: Optional[Dict[str, Any]] = None
    version: int = 0

    @property
    def broadcast(self) -> bool:
        return self.state is not None


def _now_ms() -> int:
    return int(time.time() * 1000)


class EventRouter:
    def __init__(self, session: GameSession, rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], int]] = None):
        self.session = session
        self.rng = rng or random.Random()
        self.clock = clock or _now_ms
        self._lock = threading.Lock()
        self._version = 0
        self._connections: Dict[str, Connection] = {}
        self._handlers = {
            JOIN_TEAM: self._join_team,
            JOIN_AUDIENCE: self._join_audience,
            JOIN_FACILITATOR: self._join_facilitator,
            SUBMIT_PHASE_A: self._submit_phase_a,
            SUBMIT_PHASE_B: self._submit_phase_b,
            SUBMIT_PHASE_C: self._submit_phase_c,
            SUBMIT_PHASE_D: self._submit_phase_d,
            VOTE: self._vote,
            SET_PHASE: self._set_phase,
            NEXT_ROUND: self._next_round,
            DRAW_RANDOM: self._draw_random,
            ADJUST_SCORE: self._adjust_score,
        }

    # ---- Connection registry ----

    def connect(self, sid: str) -> Dict[str, Any]:
        """Register a connection and return the state it should see first."""
        with self._lock:
            self._connections[sid] = Connection(sid=sid)
            return public_state(self.session)

    def disconnect(self, sid: str) -> None:
        # Team records stay; a reconnecting client just joins the same id again
        with self._lock:
            self._connections.pop(sid, None)

    def connection(self, sid: str) -> Optional[Connection]:
        return self._connections.get(sid)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return public_state(self.session)

    # ---- Dispatch ----

    def dispatch(self, sid: str, name: str, data: Any = None) -> Outcome:
        with self._lock:
            # Unknown sids get a scratch record; only a successful join keeps it
            conn = self._connections.get(sid) or Connection(sid=sid)
            try:
                handler = self._handlers.get(name)
                if handler is None:
                    raise UnknownEvent(name)
                replies = handler(conn, data) or []
            except ActionIgnored as exc:
                logger.debug(f"[ignored] sid={sid} role={conn.role.value} event={name} reason={exc}")
                return Outcome()
            if conn.role != Role.UNASSIGNED:
                self._connections.setdefault(sid, conn)
            self._version += 1
            version = self._version
            state = public_state(self.session)
        logger.info(f"[action] sid={sid} role={conn.role.value} team={conn.team_id} event={name} version={version}")
        return Outcome(replies=replies, state=state, version=version)

    # ---- Helpers ----

    def _team(self, team_id: Optional[int]) -> Team:
        team = self.session.find_team(team_id)
        if team is None:
            raise UnknownTeam(team_id)
        return team

    def _active_team_for(self, conn: Connection) -> Team:
        if conn.team_id is None:
            raise TeamNotBound(f"Connection {conn.sid} has not joined a team")
        team = self._team(conn.team_id)
        if not self.session.is_active(team.id):
            raise TeamNotActive(team.id, self.session.active_teams)
        return team

    def _touch(self, team: Team) -> None:
        team.last_update_at = self.clock()

    # ---- Joins ----

    def _join_team(self, conn, data):
        p = payloads.JoinTeam.from_payload(data)
        team = self._team(p.team_id)
        if p.team_name:
            team.name = p.team_name
        conn.team_id = team.id
        conn.role = Role.TEAM
        return [('joined', {'teamId': team.id, 'name': team.name})]

    def _join_audience(self, conn, data):
        conn.role = Role.AUDIENCE
        return [('joinedAudience', True)]

    def _join_facilitator(self, conn, data):
        conn.role = Role.FACILITATOR
        return [('joinedFacilitator', True)]

    # ---- Team submissions ----

    def _submit_phase_a(self, conn, data):
        team = self._active_team_for(conn)
        p = payloads.PhaseA.from_payload(data)
        team.customer = p.customer
        team.pain = p.pain
        self._touch(team)

    def _submit_phase_b(self, conn, data):
        team = self._active_team_for(conn)
        p = payloads.PhaseB.from_payload(data)
        team.wehelp = WeHelp(who=p.who, problem=p.problem, by=p.by)
        # Generic answers still score here; the facilitator can adjust later
        apply_wehelp_bonus(team, team.wehelp)
        self._touch(team)

    def _submit_phase_c(self, conn, data):
        team = self._active_team_for(conn)
        team.pivot = payloads.PhaseC.from_payload(data).pivot
        self._touch(team)

    def _submit_phase_d(self, conn, data):
        team = self._active_team_for(conn)
        team.blue_move = payloads.PhaseD.from_payload(data).blue_move
        apply_blue_move(team, team.blue_move)
        self._touch(team)

    # ---- Audience ----

    def _vote(self, conn, data):
        p = payloads.Vote.from_payload(data)
        self.session.audience_votes = AudienceVotes(
            value_team=p.value_team,
            diff_team=p.diff_team,
            red_ocean_team=p.red_ocean_team,
        )
        apply_audience_vote(
            self.session,
            payloads.to_int(p.value_team),
            payloads.to_int(p.diff_team),
            payloads.to_int(p.red_ocean_team),
        )

    # ---- Facilitator controls (not gated by role) ----

    def _set_phase(self, conn, data):
        phase = payloads.SetPhase.from_payload(data).phase
        try:
            phase = Phase(phase)
        except (ValueError, TypeError):
            raise InvalidPhase(phase)
        self.session.set_phase(phase)

    def _next_round(self, conn, data):
        self.session.advance_round()

    def _draw_random(self, conn, data):
        draw_type = payloads.DrawRandom.from_payload(data).type
        if draw_type == 'customer':
            # Only fill blanks; customer and pain are drawn independently
            for team in self.session.iter_active_teams():
                if not team.customer:
                    team.customer = self.rng.choice(CUSTOMER_CARDS)
                if not team.pain:
                    team.pain = self.rng.choice(PAIN_CARDS)
        elif draw_type == 'event':
            self.session.event_text = self.rng.choice(EVENT_CARDS)
        else:
            raise UnknownDrawType(draw_type)

    def _adjust_score(self, conn, data):
        p = payloads.AdjustScore.from_payload(data)
        team = self._team(p.team_id)
        adjust_score(team, p.delta_value, p.delta_comp, p.delta_diff)
