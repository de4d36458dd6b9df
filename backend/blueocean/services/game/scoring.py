from typing import Optional

from .state import GameSession, Team, WeHelp

ELIMINATE_KEYWORDS = ('eliminate', 'reduce')
CREATE_KEYWORDS = ('raise', 'create')


def apply_blue_move(team: Team, move: Optional[str]) -> None:
    """Score a phase D move with the ERRC keyword rules.

    Eliminate/Reduce => competition -1 (floor 0), value +1
    Raise/Create     => diff +1, value +1
    anything else    => value +1

    First match wins, so "eliminate ... create" only takes the first branch.
    """
    text = (move or '').lower()
    if any(k in text for k in ELIMINATE_KEYWORDS):
        team.competition = max(0, team.competition - 1)
        team.value += 1
    elif any(k in text for k in CREATE_KEYWORDS):
        team.diff += 1
        team.value += 1
    else:
        team.value += 1


def apply_wehelp_bonus(team: Team, wehelp: WeHelp) -> bool:
    """+1 value when every part of the statement is filled in."""
    if wehelp.is_complete():
        team.value += 1
        return True
    return False


def apply_audience_vote(session: GameSession, value_team: Optional[int],
                        diff_team: Optional[int], red_ocean_team: Optional[int]) -> None:
    # Ids that don't resolve are skipped; the others score every time
    vt = session.find_team(value_team)
    dt = session.find_team(diff_team)
    rt = session.find_team(red_ocean_team)
    if vt:
        vt.value += 1
    if dt:
        dt.diff += 1
    if rt:
        rt.competition += 1


def adjust_score(team: Team, delta_value: int = 0, delta_comp: int = 0, delta_diff: int = 0) -> None:
    team.value += delta_value
    team.competition = max(0, team.competition + delta_comp)
    team.diff += delta_diff
