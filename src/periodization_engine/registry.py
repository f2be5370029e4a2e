"""Policy registry with auto-discovery of RulePolicy tables."""

from __future__ import annotations

import importlib
import logging
import pkgutil

from periodization_engine.exceptions import PeriodizationError
from periodization_engine.rules.base import RulePolicy

logger = logging.getLogger(__name__)


class PolicyRegistry:
    """Discovers and manages the RulePolicy tables the engine evaluates.

    Auto-discovers policies by scanning the rules/ package tree for
    module-level RulePolicy instances. A new policy is added by placing a
    module in the appropriate subpackage; a registered policy can be replaced
    by registering another with the same policy_id.
    """

    def __init__(self) -> None:
        self._policies: dict[str, RulePolicy] = {}

    def discover_policies(self) -> None:
        """Scan the rules package tree and register every RulePolicy found."""
        import periodization_engine.rules as rules_pkg

        for _, module_name, _ in pkgutil.walk_packages(
            rules_pkg.__path__, prefix=rules_pkg.__name__ + "."
        ):
            module = importlib.import_module(module_name)
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if isinstance(attr, RulePolicy) and attr.policy_id not in self._policies:
                    self.register(attr)
        logger.debug("Discovered %d policies: %s", len(self._policies), self.policy_ids)

    def register(self, policy: RulePolicy) -> None:
        """Register (or replace) a policy by its policy_id."""
        self._policies[policy.policy_id] = policy

    def get(self, policy_id: str) -> RulePolicy | None:
        return self._policies.get(policy_id)

    def require(self, policy_id: str) -> RulePolicy:
        """Like get(), but a missing policy is a configuration error."""
        policy = self._policies.get(policy_id)
        if policy is None:
            raise PeriodizationError(f"No policy registered for {policy_id!r}")
        return policy

    def get_all_policies(self) -> list[RulePolicy]:
        """Return all registered policies sorted by policy_id."""
        return sorted(self._policies.values(), key=lambda p: p.policy_id)

    @property
    def policy_ids(self) -> list[str]:
        return list(self._policies.keys())
