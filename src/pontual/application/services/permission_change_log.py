"""Permission change log - one entry per successful save."""

from datetime import UTC, datetime
from uuid import uuid4

from pontual.application.dto.results import SideEffectResult
from pontual.application.services.side_channel import best_effort
from pontual.domain.entities import PermissionLog
from pontual.domain.permissions import PermissionSet, summarize_changes


class PermissionChangeLog:
    """Writes before/after snapshots and a summary of flipped flags."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def log_change(
        self,
        user_id: str,
        changed_by: str,
        before: PermissionSet | None,
        after: PermissionSet,
    ) -> SideEffectResult:
        """Persist the change. A failed write is logged and reported, never raised."""
        entry = PermissionLog(
            id=uuid4(),
            user_id=user_id,
            changed_by=changed_by,
            permissions_before=before,
            permissions_after=after,
            change_summary=summarize_changes(before, after),
            created_at=datetime.now(UTC),
        )

        async def _write() -> None:
            async with self._uow_factory() as uow:
                await uow.permission_logs.create(entry)

        return await best_effort(
            _write,
            event="permission_change_log_failed",
            user_id=user_id,
            changed_by=changed_by,
        )
