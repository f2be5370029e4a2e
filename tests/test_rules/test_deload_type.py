"""Tests for deload type selection from volume and intensity tolerance."""

from __future__ import annotations

from periodization_engine.models.deload import DeloadMetrics
from periodization_engine.models.enums import DeloadType
from periodization_engine.rules.deload.deload_type import DELOAD_TYPE_POLICY


class TestDeloadTypePolicy:
    def _make_metrics(
        self,
        volume: float = 70.0,
        intensity: float = 70.0,
        rpe: float = 7.0,
        decline: float = 0.0,
    ) -> DeloadMetrics:
        return DeloadMetrics(
            overall_fatigue=60.0,
            performance_decline_pct=decline,
            weeks_since_last_deload=4,
            readiness=60.0,
            soreness=50.0,
            stress=50.0,
            sleep_quality=60.0,
            average_rpe=rpe,
            volume_tolerance=volume,
            intensity_tolerance=intensity,
        )

    def _select(self, **kwargs) -> DeloadType:
        rule, _ = DELOAD_TYPE_POLICY.first_match(self._make_metrics(**kwargs))
        assert rule is not None
        return rule.outcome

    def test_volume_limited(self) -> None:
        assert self._select(volume=35.0, intensity=65.0) == DeloadType.VOLUME

    def test_intensity_limited(self) -> None:
        assert self._select(volume=65.0, intensity=35.0) == DeloadType.INTENSITY

    def test_exhausted_tolerances_get_complete_rest(self) -> None:
        assert self._select(volume=20.0, intensity=25.0) == DeloadType.COMPLETE

    def test_high_rpe_gets_complete_rest(self) -> None:
        assert self._select(volume=50.0, intensity=50.0, rpe=9.0) == DeloadType.COMPLETE

    def test_complete_checked_before_frequency(self) -> None:
        # Both under 60 would also satisfy the frequency row
        rule, trace = DELOAD_TYPE_POLICY.first_match(self._make_metrics(volume=25.0, intensity=28.0))
        assert rule.rule_id == "exhausted"
        assert "both_limited" not in trace.fired_rule_ids

    def test_both_limited_gets_frequency(self) -> None:
        assert self._select(volume=50.0, intensity=55.0) == DeloadType.FREQUENCY

    def test_stalled_performance_gets_active_recovery(self) -> None:
        assert self._select(volume=70.0, intensity=70.0, decline=12.0) == DeloadType.ACTIVE_RECOVERY

    def test_default_is_volume(self) -> None:
        rule, _ = DELOAD_TYPE_POLICY.first_match(self._make_metrics())
        assert rule.rule_id == "default_volume"
        assert rule.outcome == DeloadType.VOLUME
