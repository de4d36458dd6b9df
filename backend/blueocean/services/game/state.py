from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional
import logging

logger = logging.getLogger(__name__)

TEAM_COUNT = 12
TEAMS_PER_ROUND = 4
MAX_ROUND = 3
DEFAULT_GAME_CODE = 'RSU150'


class Phase(str, Enum):
    A = 'A'      # Customer / Pain
    B = 'B'      # We help ... by ...
    C = 'C'      # Event pivot
    D = 'D'      # Blue ocean move
    END = 'END'


def active_teams_for_round(round_no: int) -> List[int]:
    """Team ids playing in the given round: round r owns ids 4r-3 .. 4r."""
    start = (round_no - 1) * TEAMS_PER_ROUND + 1
    return list(range(start, start + TEAMS_PER_ROUND))


@dataclass
class WeHelp:
    who: str = ''
    problem: str = ''
    by: str = ''

    def is_complete(self) -> bool:
        return bool(self.who and self.problem and self.by)

    def to_dict(self):
        return {'who': self.who, 'problem': self.problem, 'by': self.by}


@dataclass
class Team:
    id: int
    name: str = ''
    value: int = 0
    competition: int = 0
    diff: int = 0
    customer: str = ''
    pain: str = ''
    wehelp: WeHelp = field(default_factory=WeHelp)
    pivot: str = ''
    blue_move: str = ''
    last_update_at: Optional[int] = None

    def __post_init__(self):
        if not self.name:
            self.name = f"Team {self.id}"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'value': self.value,
            'competition': self.competition,
            'diff': self.diff,
            'customer': self.customer,
            'pain': self.pain,
            'wehelp': self.wehelp.to_dict(),
            'pivot': self.pivot,
            'blueMove': self.blue_move,
            'lastUpdateAt': self.last_update_at,
        }


@dataclass
class AudienceVotes:
    # Raw ids exactly as submitted; they may not resolve to a team
    value_team: Any = None
    diff_team: Any = None
    red_ocean_team: Any = None

    def to_dict(self):
        return {
            'valueTeam': self.value_team,
            'diffTeam': self.diff_team,
            'redOceanTeam': self.red_ocean_team,
        }


class GameSession:
    """The single authoritative record of a running game.

    Built once per process and owned by the EventRouter; nothing else
    mutates it. Teams are never added or removed, and ``active_teams``
    is always derived from ``current_round``.
    """

    def __init__(self, game_code: str = DEFAULT_GAME_CODE):
        self._game_code = game_code
        self.current_round = 1
        self.active_teams = active_teams_for_round(1)
        self.phase = Phase.A
        self.event_text = ''
        self.teams = [Team(id=i) for i in range(1, TEAM_COUNT + 1)]
        self.audience_votes = AudienceVotes()

    @property
    def game_code(self) -> str:
        return self._game_code

    def find_team(self, team_id: Optional[int]) -> Optional[Team]:
        if team_id is None or not 1 <= team_id <= len(self.teams):
            return None
        return self.teams[team_id - 1]

    def is_active(self, team_id: int) -> bool:
        return team_id in self.active_teams

    def iter_active_teams(self):
        for team_id in self.active_teams:
            team = self.find_team(team_id)
            if team is not None:
                yield team

    def set_phase(self, phase: Phase) -> None:
        # Any phase may follow any other; the facilitator steers the room
        prev = self.phase
        self.phase = Phase(phase)
        logger.info(f"[phase] {prev.value} -> {self.phase.value} round={self.current_round}")

    def advance_round(self) -> None:
        """Move to the next round (capped at the last one) and restart at phase A.

        Earlier answers stay on the team records; they simply stop being
        visible once those teams leave the active set.
        """
        prev_round = self.current_round
        self.current_round = min(MAX_ROUND, self.current_round + 1)
        self.active_teams = active_teams_for_round(self.current_round)
        self.phase = Phase.A
        self.event_text = ''
        logger.info(
            f"[next_round] round {prev_round} -> {self.current_round} active={self.active_teams}"
        )

    def to_dict(self):
        """Unfiltered dump, for logs and debugging only. Clients get public_state()."""
        return {
            'gameCode': self.game_code,
            'currentRound': self.current_round,
            'activeTeams': list(self.active_teams),
            'phase': self.phase.value,
            'eventText': self.event_text,
            'teams': [t.to_dict() for t in self.teams],
            'audienceVotes': self.audience_votes.to_dict(),
        }
