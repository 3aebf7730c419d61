"""Decision rule that folds matching assignments into one answer."""

from collections.abc import Iterable

from stratum.domain.entities import Assignment


def resolve_decision(candidates: Iterable[Assignment]) -> bool:
    """Deny-overrides resolution.

    No candidates means deny. Any explicit deny wins over every grant,
    whatever its level or priority. Otherwise the permission is granted.
    """
    seen = False
    for assignment in candidates:
        if not assignment.is_granted:
            return False
        seen = True
    return seen
