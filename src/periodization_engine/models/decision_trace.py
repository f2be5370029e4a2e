"""Decision trace: the audit trail of which policy rules fired for a decision."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto


class RuleStatus(IntEnum):
    """Whether a policy rule fired, was skipped, or could not be evaluated."""

    FIRED = auto()
    SKIPPED = auto()
    NOT_APPLICABLE = auto()


@dataclass(frozen=True)
class RuleResult:
    """Record of a single policy rule's evaluation."""

    rule_id: str
    status: RuleStatus
    value: float = 0.0
    explanation: str = ""


@dataclass(frozen=True)
class DecisionTrace:
    """Complete audit trail for one policy evaluation.

    Keeps every rule's outcome, not only the ones that fired, so a decision
    can be replayed and explained to the trainee.
    """

    policy_id: str
    rule_results: tuple[RuleResult, ...] = field(default_factory=tuple)
    total: float = 0.0
    notes: str = ""

    @property
    def fired(self) -> tuple[RuleResult, ...]:
        return tuple(r for r in self.rule_results if r.status == RuleStatus.FIRED)

    @property
    def fired_rule_ids(self) -> tuple[str, ...]:
        return tuple(r.rule_id for r in self.fired)
