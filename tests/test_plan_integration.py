"""
Integration tests for storage and configuration.

Each test exercises a full path through the IO layer: PlanSchedule →
ScheduleStore → JSON file → PlanSchedule, and bundled/user YAML →
VolumeLandmark → classification.
"""

import json

import pytest

from iron_log.core.config_loader import load_split_templates, load_volume_landmarks
from iron_log.core.models import PlanSchedule, ProgramDesignAnswers
from iron_log.core.program_designer import build_guided_template, recommend_program_template
from iron_log.core.volume import get_volume_recommendation
from iron_log.io.schedule_store import ScheduleStore
from iron_log.io.serializers import (
    ValidationError,
    dict_to_plan_schedule,
    dict_to_volume_set,
    parse_set_string,
    plan_schedule_to_dict,
    validate_date,
)


# ===========================================================================
# Helpers
# ===========================================================================

@pytest.fixture
def store(tmp_path):
    """ScheduleStore backed by a temporary file."""
    return ScheduleStore(tmp_path / "schedules.json")


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point ~ at an empty directory so no real user override is read."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


def _schedule(weekdays, mode="fixed", anchor_day=None) -> PlanSchedule:
    return PlanSchedule(
        split_id="test",
        start_date="2024-01-01",
        mode=mode,
        weekdays=weekdays,
        anchor_day=anchor_day,
    )


def _write_raw(store: ScheduleStore, entry) -> None:
    store.schedules_path.write_text(json.dumps({"user1:test": entry}))


# ===========================================================================
# ScheduleStore
# ===========================================================================

class TestScheduleStore:
    """Save / load with weekday and anchor normalisation."""

    def test_missing_file_returns_none(self, store):
        assert store.load("user1", "nonexistent") is None

    def test_round_trip(self, store):
        store.save("user1", _schedule([1, 3, 5], anchor_day=1))
        loaded = store.load("user1", "test")
        assert loaded == _schedule([1, 3, 5], anchor_day=1)

    def test_creates_parent_directories(self, tmp_path):
        store = ScheduleStore(tmp_path / "nested" / "dir" / "schedules.json")
        store.save("user1", _schedule([1]))
        assert store.exists()

    def test_entries_are_per_user_and_split(self, store):
        store.save("user1", _schedule([1, 3, 5]))
        store.save("user2", _schedule([2, 4]))
        assert store.load("user1", "test").weekdays == [1, 3, 5]
        assert store.load("user2", "test").weekdays == [2, 4]

    @pytest.mark.parametrize("weekdays,expected", [
        ([1, 1, 3, 3, 5, 5], [1, 3, 5]),
        ([-1, -2], [6, 5]),
        ([7, 8, 14], [0, 1]),
        ([5, 3, 1, 3, 5, 1], [5, 3, 1]),
    ])
    def test_weekdays_normalized_on_load(self, store, weekdays, expected):
        store.save("user1", _schedule(weekdays))
        assert store.load("user1", "test").weekdays == expected

    def test_malformed_json_returns_none(self, store):
        store.schedules_path.write_text("not valid json")
        assert store.load("user1", "test") is None

    def test_undecodable_file_returns_none(self, store):
        store.schedules_path.write_bytes(b"\xff\xfe")
        assert store.load("user1", "test") is None
        assert store.delete("user1", "test") is False
        store.save("user1", _schedule([1, 3, 5]))
        assert store.load("user1", "test").weekdays == [1, 3, 5]

    @pytest.mark.parametrize("entry", [
        {"split_id": "test"},
        {"split_id": "test", "start_date": "2024-01-01"},
        {"split_id": "test", "start_date": "2024-01-01", "mode": "fixed"},
        {"split_id": "test", "start_date": "2024-01-01", "mode": "weekly", "weekdays": [1]},
        {"split_id": "test", "start_date": "2024-01-01", "mode": "fixed", "weekdays": "1,3"},
        "not an object",
    ])
    def test_invalid_entries_return_none(self, store, entry):
        _write_raw(store, entry)
        assert store.load("user1", "test") is None

    def test_fixed_mode_needs_weekdays(self, store):
        store.save("user1", _schedule([]))
        assert store.load("user1", "test") is None

    def test_flex_mode_allows_empty_weekdays(self, store):
        store.save("user1", _schedule([], mode="flex"))
        loaded = store.load("user1", "test")
        assert loaded is not None
        assert loaded.weekdays == []
        assert loaded.anchor_day == 0

    @pytest.mark.parametrize("anchor,expected", [(-1, 6), (8, 1), (3, 3)])
    def test_anchor_day_normalized(self, store, anchor, expected):
        store.save("user1", _schedule([1, 3, 5], anchor_day=anchor))
        assert store.load("user1", "test").anchor_day == expected

    def test_anchor_defaults_to_first_weekday(self, store):
        store.save("user1", _schedule([3, 5, 1]))
        assert store.load("user1", "test").anchor_day == 3

    def test_non_numeric_anchor_uses_default(self, store):
        _write_raw(store, {
            "split_id": "test",
            "start_date": "2024-01-01",
            "mode": "fixed",
            "weekdays": [1, 3, 5],
            "anchor_day": "invalid",
        })
        assert store.load("user1", "test").anchor_day == 1

    def test_delete(self, store):
        store.save("user1", _schedule([1, 3, 5]))
        assert store.delete("user1", "test") is True
        assert store.load("user1", "test") is None
        assert store.delete("user1", "test") is False


# ===========================================================================
# Serializers
# ===========================================================================

class TestSerializers:
    """Dict conversion and CLI set notation."""

    def test_plan_schedule_dict_omits_missing_anchor(self):
        d = plan_schedule_to_dict(_schedule([1, 3, 5]))
        assert "anchor_day" not in d
        assert dict_to_plan_schedule(d).anchor_day == 1

    def test_dict_to_plan_schedule_rejects_bool_weekdays(self):
        with pytest.raises(ValidationError):
            dict_to_plan_schedule({
                "split_id": "t", "start_date": "2024-01-01", "mode": "fixed", "weekdays": [True],
            })

    @pytest.mark.parametrize("text,weight,reps", [
        ("185x8", 185.0, 8.0),
        ("185 x 8", 185.0, 8.0),
        ("62.5×10", 62.5, 10.0),
        ("185 8", 185.0, 8.0),
        ("185x", 185.0, None),
    ])
    def test_parse_set_string(self, text, weight, reps):
        parsed = parse_set_string(text)
        assert parsed.weight == weight
        assert parsed.reps == reps

    @pytest.mark.parametrize("text", ["", "heavy", "185", "x8", "-5x8"])
    def test_parse_set_string_rejects_garbage(self, text):
        with pytest.raises(ValidationError):
            parse_set_string(text)

    def test_volume_set_record(self):
        s = dict_to_volume_set({"date": "2026-10-19", "muscle_group": "chest",
                                "secondary_muscle_group": "triceps"})
        assert s.completed is True
        assert s.secondary_muscle_group == "triceps"
        with pytest.raises(ValidationError):
            dict_to_volume_set({"date": "19/10/2026", "muscle_group": "chest"})
        with pytest.raises(ValidationError):
            dict_to_volume_set({"date": "2026-10-19"})

    @pytest.mark.parametrize("completed", ["false", 0, None, "yes"])
    def test_volume_set_completed_must_be_boolean(self, completed):
        with pytest.raises(ValidationError):
            dict_to_volume_set({"date": "2026-10-19", "muscle_group": "chest", "completed": completed})

    def test_volume_set_incomplete(self):
        s = dict_to_volume_set({"date": "2026-10-19", "muscle_group": "chest", "completed": False})
        assert s.completed is False

    def test_validate_date(self):
        assert validate_date("2026-10-19") == "2026-10-19"
        with pytest.raises(ValidationError):
            validate_date("2026-02-30")


# ===========================================================================
# Landmark configuration
# ===========================================================================

class TestLandmarkConfig:
    """Bundled YAML, user overrides, and bad entries."""

    def test_bundled_landmarks_are_ordered(self, isolated_home):
        landmarks = load_volume_landmarks()
        assert {"chest", "back", "quads", "hamstrings"} <= set(landmarks)
        for lm in landmarks.values():
            assert lm.mev <= lm.mav_low <= lm.mav_high <= lm.mrv

    def test_bundled_landmark_classifies(self, isolated_home):
        chest = load_volume_landmarks()["chest"]
        assert get_volume_recommendation(chest.mav_low, chest).status == "mav"
        assert get_volume_recommendation(chest.mrv + 1, chest).status == "above_mrv"

    def test_user_override_merges_over_bundled(self, isolated_home):
        config_dir = isolated_home / ".iron-log"
        config_dir.mkdir()
        (config_dir / "landmarks.yaml").write_text(
            "landmarks:\n"
            "  chest: {mrv: 30}\n"
            "  forearms: {mev: 2, mav_low: 4, mav_high: 8, mrv: 12}\n"
        )
        landmarks = load_volume_landmarks()
        assert landmarks["chest"].mrv == 30
        assert landmarks["chest"].mev == 10
        assert landmarks["forearms"].mav_high == 8

    def test_explicit_user_path(self, isolated_home, tmp_path):
        override = tmp_path / "custom.yaml"
        override.write_text("landmarks:\n  back: {mev: 12}\n")
        assert load_volume_landmarks(override)["back"].mev == 12

    def test_broken_override_is_ignored_with_warning(self, isolated_home, tmp_path):
        override = tmp_path / "broken.yaml"
        override.write_text("landmarks: [unclosed\n")
        with pytest.warns(UserWarning):
            landmarks = load_volume_landmarks(override)
        assert landmarks["chest"].mev == 10

    def test_out_of_order_entry_is_skipped_with_warning(self, isolated_home, tmp_path):
        override = tmp_path / "bad.yaml"
        override.write_text("landmarks:\n  chest: {mev: 25}\n")
        with pytest.warns(UserWarning, match="chest"):
            landmarks = load_volume_landmarks(override)
        assert "chest" not in landmarks
        assert "back" in landmarks


# ===========================================================================
# Split templates
# ===========================================================================

class TestSplitTemplates:
    """Bundled templates through the program designer."""

    def test_bundled_templates_load(self, isolated_home):
        templates = load_split_templates()
        assert len(templates) == 7
        assert all(t.evidence_label for t in templates)
        for t in templates:
            assert t.days
            assert all(day.exercises for day in t.days)

    @pytest.mark.parametrize("answers,expected", [
        (ProgramDesignAnswers(days_per_week=4), "Evidence Upper/Lower (4 days)"),
        (ProgramDesignAnswers(days_per_week=4, focus="upper_focus"),
         "Evidence Upper/Lower (4 days, Upper Focus)"),
        (ProgramDesignAnswers(days_per_week=4, focus="lower_focus"),
         "Evidence Upper/Lower (4 days, Lower Focus)"),
        (ProgramDesignAnswers(days_per_week=6, experience="beginner"),
         "Evidence Push/Pull/Legs (6 days)"),
        (ProgramDesignAnswers(days_per_week=3), "Evidence Push/Pull/Legs (3 days)"),
    ])
    def test_recommendation(self, isolated_home, answers, expected):
        assert recommend_program_template(load_split_templates(), answers).name == expected

    def test_guided_keeps_structure(self, isolated_home):
        base = recommend_program_template(load_split_templates(), ProgramDesignAnswers(days_per_week=4))
        guided = build_guided_template(base, ProgramDesignAnswers(
            days_per_week=4, focus="upper_focus", session_length="short", experience="beginner",
        ))
        assert [d.day_name for d in guided.days] == [d.day_name for d in base.days]
        lower_a = next(d for d in guided.days if d.day_name == "Lower A")
        base_lower_a = next(d for d in base.days if d.day_name == "Lower A")
        assert lower_a.exercises[0].sets <= base_lower_a.exercises[0].sets
        assert "Guided" in guided.name

    def test_user_template_replaces_and_extends(self, isolated_home):
        config_dir = isolated_home / ".iron-log"
        config_dir.mkdir()
        (config_dir / "split_templates.yaml").write_text(
            "templates:\n"
            "  - name: \"Evidence Full Body (3 days)\"\n"
            "    description: \"Trimmed\"\n"
            "    days_per_week: 2\n"
            "    days:\n"
            "      - day_name: \"Full Body\"\n"
            "        exercises:\n"
            "          - {name: \"Goblet Squat\", sets: 3, reps_min: 8, reps_max: 12}\n"
            "  - name: \"Home Twice\"\n"
            "    days_per_week: 2\n"
            "    days: []\n"
        )
        templates = load_split_templates()
        names = [t.name for t in templates]
        assert len(templates) == 8
        assert names[-1] == "Home Twice"
        replaced = templates[names.index("Evidence Full Body (3 days)")]
        assert replaced.days_per_week == 2
        assert replaced.evidence_label is None

    def test_bad_template_is_skipped_with_warning(self, isolated_home, tmp_path):
        override = tmp_path / "templates.yaml"
        override.write_text(
            "templates:\n"
            "  - name: \"No Days\"\n"
            "    days_per_week: 3\n"
            "  - name: \"Too Many\"\n"
            "    days_per_week: 9\n"
            "    days: []\n"
        )
        with pytest.warns(UserWarning):
            templates = load_split_templates(override)
        assert len(templates) == 7
