"""Hierarchy levels an assignment can live at."""

from enum import StrEnum


class AssignmentLevel(StrEnum):
    """Role, group, user, model and object assignment levels."""

    ROLE = "role"
    GROUP = "group"
    USER = "user"
    MODEL = "model"
    OBJECT = "object"

    @property
    def default_priority(self) -> int:
        """Priority used when a grant does not specify one. Lower runs first."""
        return DEFAULT_PRIORITIES[self]

    @property
    def is_user_scoped(self) -> bool:
        """True when the subject id is a user id."""
        return self in (AssignmentLevel.USER, AssignmentLevel.MODEL, AssignmentLevel.OBJECT)


DEFAULT_PRIORITIES: dict[AssignmentLevel, int] = {
    AssignmentLevel.ROLE: 0,
    AssignmentLevel.GROUP: 50,
    AssignmentLevel.USER: 100,
    AssignmentLevel.MODEL: 150,
    AssignmentLevel.OBJECT: 200,
}
