"""Game domain services: session state, scoring and the event router.

This package holds the authoritative game engine. It knows nothing about
Flask or Socket.IO; the transport layer feeds it actions and broadcasts
whatever projection it hands back.
"""
from .router import EventRouter, Outcome, Role
from .state import GameSession, Phase, active_teams_for_round
from .visibility import public_state

__all__ = [
    'EventRouter',
    'GameSession',
    'Outcome',
    'Phase',
    'Role',
    'active_teams_for_round',
    'public_state',
]
