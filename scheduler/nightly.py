"""Nightly scheduler: runs the periodization engine over every active plan.

Usage:
    python -m scheduler.nightly --once      # single run (for cron)
    python -m scheduler.nightly --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime, timedelta

from periodization_engine.engine import PeriodizationEngine
from periodization_engine.exceptions import ConcurrentModificationError
from periodization_engine.models.enums import ExperienceLevel, MassUnit
from periodization_engine.models.progression import ProgressionSettings
from plan_store import JsonPlanStore

from scheduler.config import (
    BASE_INCREMENT,
    LOOKBACK_DAYS,
    MASS_UNIT,
    MAX_CONFLICT_RETRIES,
    NIGHTLY_HOUR,
    NIGHTLY_MINUTE,
    STORE_DIR,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_engine() -> PeriodizationEngine:
    """Engine with progression settings taken from the environment."""
    settings = ProgressionSettings(base_increment=BASE_INCREMENT, mass_unit=MassUnit(MASS_UNIT))
    return PeriodizationEngine(progression_settings=settings)


def _experience_for(store: JsonPlanStore, user_id: str) -> ExperienceLevel:
    profile = store.read_profile(user_id)
    return ExperienceLevel(profile.get("experience_level", ExperienceLevel.INTERMEDIATE.value))


def run_plan(
    store: JsonPlanStore,
    engine: PeriodizationEngine,
    plan_id: str,
    as_of: date,
    now: datetime,
) -> dict:
    """Evaluate one plan, persist any phase change, and write recommendations.

    A concurrent write to the plan between read and save makes the whole
    evaluation start over from a fresh read, up to MAX_CONFLICT_RETRIES times.

    Returns:
        The recommendations payload that was written.

    Raises:
        ConcurrentModificationError: the plan kept changing on every attempt.
    """
    for attempt in range(1, MAX_CONFLICT_RETRIES + 1):
        plan = store.get_plan(plan_id)
        start = as_of - timedelta(days=LOOKBACK_DAYS)
        snapshots = store.read_wellness(plan.user_id, start, as_of)
        logs = store.read_performance(plan.user_id, start, as_of)
        experience = _experience_for(store, plan.user_id)

        result = engine.plan_cycle(
            plan,
            snapshots,
            logs,
            store.read_progress(plan.id),
            deload_history=store.read_deload_events(plan.id),
            as_of=as_of,
            experience=experience,
        )

        current = plan
        applied = False
        transition = result.transition.transition
        if transition is not None:
            outcome = engine.apply_transition(plan, transition, now)
            if outcome.applied:
                try:
                    store.save_plan(outcome.plan, expected_last_adjusted_at=plan.last_adjusted_at)
                except ConcurrentModificationError:
                    logger.warning(
                        "Plan %s changed during evaluation (attempt %d/%d), retrying",
                        plan_id,
                        attempt,
                        MAX_CONFLICT_RETRIES,
                    )
                    continue
                applied = True
            if outcome.deload_event is not None:
                store.append_deload_event(outcome.deload_event)
            current = outcome.plan

        recommendations = result.recommendations
        if current.current_phase_index != plan.current_phase_index and not current.is_complete:
            _, recommendations = engine.recommend_exercises(
                logs, result.fatigue, current.current_phase, experience
            )

        payload = {
            "plan_id": plan.id,
            "as_of": as_of,
            "phase_index": current.current_phase_index,
            "phase_type": current.current_phase.type,
            "plan_complete": current.is_complete,
            "fatigue": result.fatigue,
            "deload": result.deload,
            "transition": transition,
            "transition_applied": applied,
            "recommendations": recommendations,
        }
        store.write_recommendations(plan.id, as_of, payload)
        logger.info(
            "Plan %s: fatigue %.1f (%s), %d recommendation(s)%s",
            plan.id,
            result.fatigue.overall_score,
            result.fatigue.category.value,
            len(recommendations),
            f", transition {transition.trigger.value}" if applied else "",
        )
        return payload

    raise ConcurrentModificationError(
        f"plan {plan_id} kept changing; gave up after {MAX_CONFLICT_RETRIES} attempts",
        plan_id=plan_id,
    )


def nightly_job(store: JsonPlanStore | None = None, as_of: date | None = None) -> int:
    """Execute one nightly cycle over every active plan.

    Returns the number of plans processed successfully. A failure on one
    plan is logged and does not stop the others.
    """
    logger.info("Starting nightly job")
    store = store or JsonPlanStore(STORE_DIR)
    engine = build_engine()
    as_of = as_of or date.today()
    now = datetime.now()

    processed = 0
    for plan_id in store.list_plan_ids():
        try:
            if store.get_plan(plan_id).is_complete:
                continue
            run_plan(store, engine, plan_id, as_of, now)
            processed += 1
        except Exception as exc:
            logger.error("Failed to process plan %s: %s", plan_id, exc)

    logger.info("Nightly job complete: %d plan(s) processed", processed)
    return processed


def main() -> None:
    parser = argparse.ArgumentParser(description="Periodization engine nightly scheduler")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    args = parser.parse_args()

    if args.once:
        nightly_job()
    else:
        from apscheduler.schedulers.blocking import BlockingScheduler

        scheduler = BlockingScheduler()
        scheduler.add_job(
            nightly_job,
            "cron",
            hour=NIGHTLY_HOUR,
            minute=NIGHTLY_MINUTE,
            id="nightly_job",
        )
        logger.info(
            "Scheduler started, nightly job at %02d:%02d",
            NIGHTLY_HOUR,
            NIGHTLY_MINUTE,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
