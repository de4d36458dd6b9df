"""Reasons an inbound action is dropped.

These never reach a client. The router raises them from inside a handler
and turns them into an empty outcome, so a malformed message from one
connection cannot disturb the shared session.
"""


class ActionIgnored(Exception):
    """Base class for every dropped action."""
    pass


class UnknownEvent(ActionIgnored):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown event {name!r}")


class UnknownTeam(ActionIgnored):
    def __init__(self, team_id):
        self.team_id = team_id
        super().__init__(f"Team {team_id!r} not found")


class TeamNotBound(ActionIgnored):
    """The connection has not joined as a team."""
    pass


class TeamNotActive(ActionIgnored):
    def __init__(self, team_id, active_teams):
        self.team_id = team_id
        self.active_teams = list(active_teams)
        super().__init__(f"Team {team_id} is not active (active={self.active_teams})")


class InvalidPhase(ActionIgnored):
    def __init__(self, phase):
        self.phase = phase
        super().__init__(f"Invalid phase {phase!r}")


class UnknownDrawType(ActionIgnored):
    def __init__(self, draw_type):
        self.draw_type = draw_type
        super().__init__(f"Unknown draw type {draw_type!r}")


class MalformedPayload(ActionIgnored):
    """The payload, or one of its text fields, has the wrong shape."""
    pass
