from typing import Any, Dict

from .state import GameSession, Team, WeHelp


def _public_team(team: Team, visible: bool) -> Dict[str, Any]:
    wehelp = team.wehelp if visible else WeHelp()
    return {
        'id': team.id,
        'name': team.name,
        'value': team.value,
        'competition': team.competition,
        'diff': team.diff,
        'customer': team.customer if visible else '',
        'pain': team.pain if visible else '',
        'wehelp': wehelp.to_dict(),
        'pivot': team.pivot if visible else '',
        'blueMove': team.blue_move if visible else '',
    }


def public_state(session: GameSession) -> Dict[str, Any]:
    """Build the view every observer receives.

    Scores and names are public. Narrative answers are shown only for the
    teams playing the current round; everyone else gets blanks, since the
    broadcast goes to all observers alike. Built fresh on every call.
    """
    active = set(session.active_teams)
    return {
        'gameCode': session.game_code,
        'currentRound': session.current_round,
        'activeTeams': list(session.active_teams),
        'phase': session.phase.value,
        'eventText': session.event_text,
        'teams': [_public_team(t, t.id in active) for t in session.teams],
    }
