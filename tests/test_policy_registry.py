"""Tests for PolicyRegistry: auto-discovery of policy tables from rules/."""

from __future__ import annotations

import pytest

from periodization_engine.exceptions import PeriodizationError
from periodization_engine.registry import PolicyRegistry
from periodization_engine.rules.base import PolicyRule, RulePolicy

EXPECTED_POLICIES = {
    "fatigue_penalties",
    "deload_necessity",
    "deload_urgency",
    "deload_type",
    "phase_transition",
    "progression_decision",
    "readiness_adjustments",
}


class TestPolicyRegistry:
    def setup_method(self) -> None:
        self.registry = PolicyRegistry()
        self.registry.discover_policies()

    def test_discovers_every_policy(self) -> None:
        assert set(self.registry.policy_ids) == EXPECTED_POLICIES

    def test_get_all_sorted_by_id(self) -> None:
        ids = [p.policy_id for p in self.registry.get_all_policies()]
        assert ids == sorted(EXPECTED_POLICIES)

    def test_get_missing_returns_none(self) -> None:
        assert self.registry.get("nonexistent") is None

    def test_require_missing_raises(self) -> None:
        with pytest.raises(PeriodizationError):
            PolicyRegistry().require("deload_type")

    def test_register_replaces_by_id(self) -> None:
        custom = RulePolicy(
            policy_id="deload_necessity",
            version="2.0.0",
            rules=(PolicyRule("always", lambda m: True, 4),),
        )
        self.registry.register(custom)
        assert self.registry.require("deload_necessity").version == "2.0.0"

    def test_discovery_keeps_registered_replacement(self) -> None:
        registry = PolicyRegistry()
        custom = RulePolicy(policy_id="deload_type", version="9.9.9", rules=())
        registry.register(custom)
        registry.discover_policies()
        assert registry.require("deload_type") is custom
