"""Decision cache port - short-lived memo of evaluation results."""

from collections.abc import Hashable
from typing import Protocol
from uuid import UUID


class DecisionCache(Protocol):
    """Port for caching decisions and dropping them when assignments change."""

    def get(self, key: Hashable) -> bool | None: ...

    def set(self, key: Hashable, allowed: bool) -> None: ...

    def invalidate_user(self, user_id: UUID) -> None: ...

    def clear(self) -> None: ...
