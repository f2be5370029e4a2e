"""JsonPlanStore: one directory of JSON files per concern.

Layout under ``root``::

    plans/<plan_id>.json              PeriodizationPlan
    progress/<plan_id>.json           list of WeeklyProgress
    deloads/<plan_id>.json            append-only list of DeloadEvent
    recommendations/<plan_id>/<date>.json
    wellness/<user_id>.json           list of check-in records
    performance/<user_id>.json        list of performance records
    profiles/<user_id>.json           trainee profile (experience level, ...)
    locks/<concern>-<file>.lock       advisory lock files

Every write goes to a temporary file in the same directory and is moved into
place with ``os.replace``, so readers never see a half-written file. Every
read-modify-write (plan compare-and-swap, appends) holds an exclusive
``fcntl.flock`` on the file's lock, so it is atomic across threads,
store instances and processes sharing ``root``. Plan writes use optimistic
concurrency on ``last_adjusted_at``.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Iterator

from periodization_engine.exceptions import ConcurrentModificationError
from periodization_engine.ingestion.records import (
    log_from_record,
    snapshot_from_record,
    sort_logs,
    upsert_snapshots,
)
from periodization_engine.models.deload import DeloadEvent
from periodization_engine.models.plan import PeriodizationPlan, WeeklyProgress
from periodization_engine.models.wellness import PerformanceLog, WellnessSnapshot
from periodization_engine.serialization import (
    deload_event_from_dict,
    plan_from_dict,
    progress_from_dict,
    to_dict,
)

from plan_store.exceptions import PlanNotFoundError, StoreError

logger = logging.getLogger(__name__)


class JsonPlanStore:
    """Filesystem implementation of the engine's collaborator interfaces.

    Satisfies ``MetricsReader``, ``PlanRepository`` and ``DeloadEventWriter``
    from ``periodization_engine.ports``. Safe for concurrent use by threads,
    by several instances and by several processes on the same ``root``:
    a plan save compares ``last_adjusted_at`` and replaces the file under
    one exclusive lock, so of two writers holding the same expectation
    exactly one succeeds.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser()
        self._lock = threading.RLock()
        for sub in (
            "plans", "progress", "deloads", "recommendations", "wellness", "performance", "profiles", "locks"
        ):
            (self.root / sub).mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # File helpers
    # ------------------------------------------------------------------

    def _read_json(self, path: Path, default: Any = None) -> Any:
        if not path.exists():
            return default
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Failed to read {path}: {exc}", path=str(path)) from exc

    def _write_json(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, path)
        except OSError as exc:
            raise StoreError(f"Failed to write {path}: {exc}", path=str(path)) from exc
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)

    @contextmanager
    def _locked(self, path: Path) -> Iterator[None]:
        """Hold this instance's thread lock and an exclusive flock for ``path``.

        Not re-entrant for the same path: flock on a second descriptor would
        wait on the first.
        """
        lock_path = self.root / "locks" / f"{path.parent.name}-{path.name}.lock"
        with self._lock, open(lock_path, "a") as handle:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

    def _plan_path(self, plan_id: str) -> Path:
        return self.root / "plans" / f"{plan_id}.json"

    # ------------------------------------------------------------------
    # Plans
    # ------------------------------------------------------------------

    def list_plan_ids(self) -> list[str]:
        return sorted(p.stem for p in (self.root / "plans").glob("*.json"))

    def list_active_plans(self) -> list[PeriodizationPlan]:
        """Every stored plan that is not complete, ordered by id."""
        plans = [self.get_plan(plan_id) for plan_id in self.list_plan_ids()]
        return [plan for plan in plans if not plan.is_complete]

    def get_plan(self, plan_id: str) -> PeriodizationPlan:
        data = self._read_json(self._plan_path(plan_id))
        if data is None:
            raise PlanNotFoundError(plan_id)
        try:
            return plan_from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Corrupt plan {plan_id}: {exc}", path=str(self._plan_path(plan_id))) from exc

    def save_plan(
        self,
        plan: PeriodizationPlan,
        expected_last_adjusted_at: datetime | None = None,
    ) -> None:
        """Write a plan.

        With ``expected_last_adjusted_at`` the write only succeeds if the
        stored plan still carries that timestamp; without it the plan must
        not exist yet (creation) or is overwritten unconditionally.

        Raises:
            ConcurrentModificationError: the stored plan changed since it was read.
            PlanNotFoundError: an expected plan no longer exists.
        """
        with self._locked(self._plan_path(plan.id)):
            if expected_last_adjusted_at is not None:
                stored = self.get_plan(plan.id)
                if stored.last_adjusted_at != expected_last_adjusted_at:
                    raise ConcurrentModificationError(
                        f"plan {plan.id} was modified at {stored.last_adjusted_at.isoformat()}, "
                        f"expected {expected_last_adjusted_at.isoformat()}",
                        plan_id=plan.id,
                    )
            self._write_json(self._plan_path(plan.id), to_dict(plan))
        logger.debug("Saved plan %s (phase %d)", plan.id, plan.current_phase_index)

    # ------------------------------------------------------------------
    # Weekly progress
    # ------------------------------------------------------------------

    def read_progress(self, plan_id: str) -> list[WeeklyProgress]:
        rows = self._read_json(self.root / "progress" / f"{plan_id}.json", default=[])
        return [progress_from_dict(row) for row in rows]

    def append_progress(self, plan_id: str, entry: WeeklyProgress) -> None:
        """Add a weekly entry; an entry for the same phase and week replaces it."""
        path = self.root / "progress" / f"{plan_id}.json"
        with self._locked(path):
            rows = [
                row
                for row in self._read_json(path, default=[])
                if not (row["phase_id"] == entry.phase_id and row["week"] == entry.week)
            ]
            rows.append(to_dict(entry))
            self._write_json(path, rows)

    # ------------------------------------------------------------------
    # Deload events
    # ------------------------------------------------------------------

    def read_deload_events(self, plan_id: str) -> list[DeloadEvent]:
        rows = self._read_json(self.root / "deloads" / f"{plan_id}.json", default=[])
        return sorted((deload_event_from_dict(row) for row in rows), key=lambda e: e.date)

    def append_deload_event(self, event: DeloadEvent) -> bool:
        """Append a deload event. Returns False if one with the same id exists."""
        path = self.root / "deloads" / f"{event.plan_id}.json"
        with self._locked(path):
            rows = self._read_json(path, default=[])
            if any(row["id"] == event.id for row in rows):
                logger.debug("Deload event %s already recorded", event.id)
                return False
            rows.append(to_dict(event))
            self._write_json(path, rows)
        logger.info("Recorded %s deload %s for plan %s", event.type.value, event.id, event.plan_id)
        return True

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def _append_records(self, path: Path, records: Iterable[dict]) -> None:
        with self._locked(path):
            rows = self._read_json(path, default=[])
            rows.extend(records)
            self._write_json(path, rows)

    def append_wellness(self, snapshots: Iterable[WellnessSnapshot]) -> None:
        by_user: dict[str, list[dict]] = {}
        for snapshot in snapshots:
            by_user.setdefault(snapshot.user_id, []).append(to_dict(snapshot))
        for user_id, rows in by_user.items():
            self._append_records(self.root / "wellness" / f"{user_id}.json", rows)

    def append_performance(self, logs: Iterable[PerformanceLog]) -> None:
        by_user: dict[str, list[dict]] = {}
        for log in logs:
            by_user.setdefault(log.user_id, []).append(to_dict(log))
        for user_id, rows in by_user.items():
            self._append_records(self.root / "performance" / f"{user_id}.json", rows)

    def read_wellness(self, user_id: str, start: date, end: date) -> list[WellnessSnapshot]:
        """Check-ins in [start, end], one per day (later records win), oldest first."""
        rows = self._read_json(self.root / "wellness" / f"{user_id}.json", default=[])
        snapshots = [snapshot_from_record({"user_id": user_id, **row}) for row in rows]
        return [s for s in upsert_snapshots(snapshots) if start <= s.date <= end]

    def read_performance(self, user_id: str, start: date, end: date) -> list[PerformanceLog]:
        """Performance logs in [start, end], oldest first."""
        rows = self._read_json(self.root / "performance" / f"{user_id}.json", default=[])
        logs = [log_from_record({"user_id": user_id, **row}) for row in rows]
        return [log for log in sort_logs(logs) if start <= log.date <= end]

    # ------------------------------------------------------------------
    # Profiles and recommendations
    # ------------------------------------------------------------------

    def read_profile(self, user_id: str) -> dict:
        return self._read_json(self.root / "profiles" / f"{user_id}.json", default={})

    def save_profile(self, user_id: str, profile: dict) -> None:
        self._write_json(self.root / "profiles" / f"{user_id}.json", profile)

    def write_recommendations(self, plan_id: str, as_of: date, payload: Any) -> Path:
        """Write one run's recommendations; a re-run on the same day overwrites."""
        path = self.root / "recommendations" / plan_id / f"{as_of.isoformat()}.json"
        self._write_json(path, to_dict(payload))
        return path

    def read_recommendations(self, plan_id: str, as_of: date) -> Any:
        return self._read_json(self.root / "recommendations" / plan_id / f"{as_of.isoformat()}.json")
