"""Result types for operations that report instead of raising."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SideEffectResult:
    """Outcome of a best-effort write (audit, change log, error tracking).

    Callers may inspect it or discard it; a failed side effect never
    propagates into the operation it accompanies.
    """

    ok: bool
    error: str | None = None
    skipped: bool = False


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a permission save or delete."""

    success: bool
    error: str | None = None


@dataclass(frozen=True)
class BulkFailure:
    target: str
    reason: str


@dataclass
class BulkResult:
    """Per-item outcome counts of a bulk operation."""

    succeeded: int = 0
    failed: int = 0
    failures: list[BulkFailure] = field(default_factory=list)

    def record_success(self) -> None:
        self.succeeded += 1

    def record_failure(self, target: object, reason: str) -> None:
        self.failed += 1
        self.failures.append(BulkFailure(target=str(target), reason=reason))

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    def to_dict(self) -> dict[str, object]:
        return {
            "succeeded": self.succeeded,
            "failed": self.failed,
            "failures": [{"target": f.target, "reason": f.reason} for f in self.failures],
        }
