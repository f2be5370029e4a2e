"""Table-driven policy rules.

Every scoring decision in the engine is expressed as a RulePolicy: an ordered
tuple of PolicyRule rows. A row pairs a predicate over a context object with
the points or factor it contributes and a human-readable explanation. Policies
are plain data, so they can be listed, unit-tested in isolation and swapped
through the PolicyRegistry.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Union

from periodization_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus

Predicate = Callable[[Any], bool]
RuleValue = Union[float, Callable[[Any], float]]


def context_values(context: Any) -> dict[str, Any]:
    """Field values of a dataclass context, for explanation formatting."""
    return {f.name: getattr(context, f.name) for f in fields(context)}


@dataclass(frozen=True)
class PolicyRule:
    """One row of a policy table.

    Attributes:
        rule_id: Stable identifier, also used as a machine-readable reason code.
        predicate: Decides whether the row fires for a context.
        value: Points (additive policies) or a factor/delta; may be a
            callable of the context when the amount depends on the input.
        explanation: ``str.format`` template over the context's fields.
        outcome: Optional categorical result for first-match policies.
        confidence: Optional confidence attached to the outcome.
    """

    rule_id: str
    predicate: Predicate
    value: RuleValue = 0.0
    explanation: str = ""
    outcome: Any = None
    confidence: float | None = None

    def applies(self, context: Any) -> bool:
        return bool(self.predicate(context))

    def value_for(self, context: Any) -> float:
        if callable(self.value):
            return float(self.value(context))
        return float(self.value)

    def describe(self, context: Any) -> str:
        if not self.explanation:
            return self.rule_id
        return self.explanation.format(**context_values(context))


@dataclass(frozen=True)
class RulePolicy:
    """An ordered, versioned table of PolicyRule rows."""

    policy_id: str
    version: str
    rules: tuple[PolicyRule, ...]
    description: str = ""

    @property
    def rule_ids(self) -> tuple[str, ...]:
        return tuple(rule.rule_id for rule in self.rules)

    def evaluate(self, context: Any) -> DecisionTrace:
        """Evaluate every row and sum the values of those that fire.

        Row order does not affect the total.
        """
        results: list[RuleResult] = []
        total = 0.0
        for rule in self.rules:
            if rule.applies(context):
                value = rule.value_for(context)
                total += value
                results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.FIRED,
                        value=value,
                        explanation=rule.describe(context),
                    )
                )
            else:
                results.append(RuleResult(rule_id=rule.rule_id, status=RuleStatus.SKIPPED))
        return DecisionTrace(policy_id=self.policy_id, rule_results=tuple(results), total=total)

    def first_match(self, context: Any) -> tuple[PolicyRule | None, DecisionTrace]:
        """Return the first row that fires; later rows are marked not applicable."""
        results: list[RuleResult] = []
        matched: PolicyRule | None = None
        for rule in self.rules:
            if matched is not None:
                results.append(RuleResult(rule_id=rule.rule_id, status=RuleStatus.NOT_APPLICABLE))
                continue
            if rule.applies(context):
                matched = rule
                results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.FIRED,
                        value=rule.value_for(context),
                        explanation=rule.describe(context),
                    )
                )
            else:
                results.append(RuleResult(rule_id=rule.rule_id, status=RuleStatus.SKIPPED))
        trace = DecisionTrace(
            policy_id=self.policy_id,
            rule_results=tuple(results),
            total=matched.value_for(context) if matched is not None else 0.0,
            notes=matched.rule_id if matched is not None else "",
        )
        return matched, trace
