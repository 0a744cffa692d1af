"""
Exceptions raised by the Courtside tracking services.

Every rejected command raises a ConstraintViolation subclass before any
state is touched, so the event log and rosters are unchanged afterwards.
"""
from typing import Iterable, List


class GameTrackingError(Exception):
    """Base exception for the tracking core."""
    pass


class ConstraintViolation(GameTrackingError):
    """A command was rejected because it would break a game rule."""
    pass


class UnknownPlayerError(ConstraintViolation):
    """Player id is not a member of either team."""
    pass


class DuplicatePlayerError(ConstraintViolation):
    """Player id is already on one of the rosters."""
    pass


class IneligiblePlayerError(ConstraintViolation):
    """Player is not currently active for their team."""
    pass


class FouledOutError(ConstraintViolation):
    """Player has reached the foul-out limit."""
    pass


class IneligibleRespondentError(ConstraintViolation):
    """Chosen follow-up respondent is outside the allowed pool."""
    pass


class IllegalStatTypeError(ConstraintViolation):
    """Stat type is not legal for the league's sport."""
    pass


class FollowUpPendingError(ConstraintViolation):
    """A follow-up question must be answered or cancelled first."""
    pass


class NoPendingFollowUpError(ConstraintViolation):
    """A follow-up answer was given but nothing is pending."""
    pass


class InvalidPeriodError(ConstraintViolation):
    """Period label is not valid for the league's period type."""
    pass


class InvalidClockTimeError(ConstraintViolation):
    """Clock value is outside the editable range or the clock cannot run."""
    pass


class InvalidLocationError(ConstraintViolation):
    """Shot location is outside the court or given for a non-shot stat."""
    pass


class SelectionLimitError(ConstraintViolation):
    """Selecting another player would exceed the team's starters count."""
    pass


class SubstitutionNotInProgress(ConstraintViolation):
    """Substitution command issued outside substitution mode."""
    pass


class SubstitutionRejected(ConstraintViolation):
    """
    Confirming substitutions failed for one or more teams.

    Attributes:
        teams: Ids of the teams whose selection exceeds the limit
    """

    def __init__(self, teams: Iterable[str], limit: int):
        self.teams: List[str] = list(teams)
        self.limit = limit
        super().__init__(
            f"Too many players selected for team(s) {', '.join(self.teams)}; "
            f"maximum is {limit}"
        )


class PersistenceError(GameTrackingError):
    """Snapshot could not be written to or read from storage."""
    pass
