"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from tenant_events.domain import EntityId, EventSchedule, ScheduleDraft

if TYPE_CHECKING:
    from tenant_events.query.compiler import QueryPlan


class QueryStore(ABC):
    """Read side: evaluates compiled query plans.

    Implementations raise ``StoreUnavailableError`` when the backend fails.
    """

    @abstractmethod
    async def count(self, plan: "QueryPlan") -> int:
        """Return the number of rows matched by the plan's filter stages."""
        ...

    @abstractmethod
    async def fetch(self, plan: "QueryPlan") -> list[Any]:
        """Return the shaped, sorted and windowed rows as domain models."""
        ...


class EventStore(ABC):
    """Write side: reference checks and schedule mutations for one tenant."""

    @abstractmethod
    def event_exists(self, tenant_id: str, event_id: EntityId) -> bool:
        ...

    @abstractmethod
    def schedule_exists(self, tenant_id: str, schedule_id: EntityId) -> bool:
        ...

    @abstractmethod
    def missing_speaker_ids(
        self, tenant_id: str, speaker_ids: tuple[EntityId, ...]
    ) -> tuple[EntityId, ...]:
        """Return the ids among ``speaker_ids`` with no speaker in the tenant."""
        ...

    @abstractmethod
    def create_schedule(self, tenant_id: str, draft: ScheduleDraft) -> EventSchedule:
        ...

    @abstractmethod
    def append_schedule_speaker(
        self, tenant_id: str, schedule_id: EntityId, speaker_id: EntityId
    ) -> bool:
        """Append a speaker to a schedule's list.

        Returns False when the speaker is already attached; the list is left
        unchanged in that case. Raises ``ScheduleNotFoundError`` when the
        schedule is not visible to the tenant.
        """
        ...
