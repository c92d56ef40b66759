"""Best-effort side channel for secondary writes."""

from collections.abc import Awaitable, Callable

from pontual.application.dto.results import SideEffectResult
from pontual.observability.logging import get_logger

logger = get_logger(__name__)


async def best_effort(
    operation: Callable[[], Awaitable[object]],
    *,
    event: str,
    **fields: object,
) -> SideEffectResult:
    """Run a secondary write; report failure in the result instead of raising."""
    try:
        await operation()
    except Exception as e:
        logger.warning(event, error=str(e), error_class=type(e).__name__, **fields)
        return SideEffectResult(ok=False, error=str(e))
    return SideEffectResult(ok=True)
