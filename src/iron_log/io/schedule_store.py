"""
JSON-based storage for plan schedules.

Handles reading and writing the schedules file.
"""

import json
from pathlib import Path

from ..core.config_loader import get_config_dir
from ..core.models import PlanSchedule
from .serializers import ValidationError, dict_to_plan_schedule, plan_schedule_to_dict


class ScheduleStore:
    """
    Manages plan schedules stored in a single JSON file.

    The file holds one object keyed by "<user_id>:<split_id>":

        {"u1:ppl": {"split_id": "ppl", "start_date": "2026-10-19",
                    "mode": "fixed", "weekdays": [1, 3, 5], "anchor_day": 1}}
    """

    def __init__(self, schedules_path: str | Path):
        """
        Initialize the schedule store.

        Args:
            schedules_path: Path to the JSON schedules file
        """
        self.schedules_path = Path(schedules_path)

    @staticmethod
    def key_for(user_id: str, split_id: str) -> str:
        return f"{user_id}:{split_id}"

    def exists(self) -> bool:
        """Check if the schedules file exists."""
        return self.schedules_path.exists()

    def _read_all(self) -> dict:
        """Raw file contents; {} when missing or unreadable."""
        if not self.schedules_path.exists():
            return {}
        try:
            with open(self.schedules_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, user_id: str, split_id: str) -> PlanSchedule | None:
        """
        Load the schedule for one user's split.

        Returns:
            PlanSchedule with normalized weekdays and anchor, or None if the
            entry is missing or invalid
        """
        raw = self._read_all().get(self.key_for(user_id, split_id))
        if raw is None:
            return None
        try:
            return dict_to_plan_schedule(raw)
        except ValidationError:
            return None

    def save(self, user_id: str, schedule: PlanSchedule) -> None:
        """
        Store a schedule, replacing any previous one for the same split.

        Creates parent directories if needed.
        """
        data = self._read_all()
        data[self.key_for(user_id, schedule.split_id)] = plan_schedule_to_dict(schedule)

        self.schedules_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.schedules_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def delete(self, user_id: str, split_id: str) -> bool:
        """
        Remove a stored schedule.

        Returns:
            True if an entry was removed
        """
        data = self._read_all()
        if data.pop(self.key_for(user_id, split_id), None) is None:
            return False
        with open(self.schedules_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        return True


def get_default_schedules_path() -> Path:
    """Default schedules file: ~/.iron-log/schedules.json."""
    return get_config_dir() / "schedules.json"


def get_default_store() -> ScheduleStore:
    """
    Get a ScheduleStore with the default path.

    Returns:
        ScheduleStore instance
    """
    return ScheduleStore(get_default_schedules_path())
