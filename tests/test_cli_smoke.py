"""
Minimal smoke tests for iron-log CLI.

Tests basic functionality:
- App runs and shows help
- Sets are compared and e1RM estimated
- Set ranges round-trip through notes
- Weekly volume is classified
- Schedules are saved and read back
- Macro targets are calculated
"""

import json

import pytest
from typer.testing import CliRunner

from iron_log.cli.main import app


runner = CliRunner()


@pytest.fixture
def schedules_path(tmp_path):
    """Schedules file inside a temporary directory."""
    return tmp_path / "schedules.json"


@pytest.fixture
def home_env(tmp_path):
    """Environment with HOME pointed at an empty directory."""
    return {"HOME": str(tmp_path)}


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "schedule" in result.output
        assert "macros" in result.output
        assert "recommend" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "Usage" in result.output


class TestPerformanceCommands:
    """compare and e1rm."""

    def test_compare_more_reps_beats(self):
        result = runner.invoke(app, ["compare", "185x9", "185x8"])
        assert result.exit_code == 0
        assert "beat" in result.output
        assert "185 × 8" in result.output

    def test_compare_json_uses_e1rm(self):
        # 205 × 5 → 239.17, 200 × 8 → 253.33
        result = runner.invoke(app, ["compare", "205x5", "200x8", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["result"] == "below"
        assert data["previous"] == "200 × 8"
        assert data["current_e1rm"] == pytest.approx(239.17)

    def test_compare_incomplete_set_is_unknown(self):
        result = runner.invoke(app, ["compare", "185x", "185x8", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["result"] == "unknown"
        assert data["current_e1rm"] is None

    def test_compare_rejects_bad_set(self):
        result = runner.invoke(app, ["compare", "heavy", "185x8"])
        assert result.exit_code == 1
        assert "Invalid set format" in result.output

    def test_e1rm_json(self):
        result = runner.invoke(app, ["e1rm", "200", "5", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["e1rm"] == pytest.approx(233.33)

    def test_e1rm_rejects_zero_reps(self):
        result = runner.invoke(app, ["e1rm", "200", "0"])
        assert result.exit_code == 1


class TestSetRangeCommands:
    """set-range serialize / parse."""

    def test_serialize_appends_tag(self):
        result = runner.invoke(app, [
            "set-range", "serialize",
            "--min", "2", "--target", "3", "--max", "4",
            "--notes", "Pause reps",
        ])
        assert result.exit_code == 0
        assert result.output == 'Pause reps\n[set-range]{"min":2,"max":4}\n'

    def test_serialize_single_value_keeps_notes(self):
        result = runner.invoke(app, [
            "set-range", "serialize",
            "--min", "3", "--target", "3", "--max", "3",
            "--notes", 'Pause reps\\n[set-range]{"min":2,"max":4}',
        ])
        assert result.exit_code == 0
        assert result.output == "Pause reps\n"

    def test_parse_json(self):
        result = runner.invoke(app, [
            "set-range", "parse",
            'Top set\\n[set-range]{"min":2,"max":5}',
            "--target", "3", "--json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "min_sets": 2,
            "target_sets": 3,
            "max_sets": 5,
            "base_notes": "Top set",
        }

    def test_parse_without_tag_falls_back_to_target(self):
        result = runner.invoke(app, ["set-range", "parse", "Just notes", "--target", "4", "--json"])
        data = json.loads(result.output)
        assert data["min_sets"] == data["max_sets"] == 4


class TestVolumeCommands:
    """volume classify / week."""

    def test_classify_explicit_thresholds(self):
        result = runner.invoke(app, [
            "volume", "classify", "quads", "22",
            "--mev", "8", "--mav-low", "12", "--mav-high", "18", "--mrv", "20",
            "--json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output)["status"] == "above_mrv"

    def test_classify_partial_thresholds_rejected(self):
        result = runner.invoke(app, ["volume", "classify", "quads", "12", "--mev", "8"])
        assert result.exit_code == 1

    def test_classify_out_of_order_thresholds_rejected(self):
        result = runner.invoke(app, [
            "volume", "classify", "quads", "12",
            "--mev", "14", "--mav-low", "12", "--mav-high", "18", "--mrv", "20",
        ])
        assert result.exit_code == 1

    def test_classify_bundled_landmark(self, home_env):
        result = runner.invoke(app, ["volume", "classify", "chest", "15", "--json"], env=home_env)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "mav"
        assert data["message"].startswith("Optimal volume range")

    def test_classify_unknown_muscle(self, home_env):
        result = runner.invoke(app, ["volume", "classify", "necks", "5"], env=home_env)
        assert result.exit_code == 1

    def test_week_counts_primary_and_secondary(self, tmp_path, home_env):
        log_path = tmp_path / "sets.jsonl"
        records = [
            {"date": "2026-10-19", "muscle_group": "chest", "secondary_muscle_group": "triceps"},
            {"date": "2026-10-19", "muscle_group": "chest", "secondary_muscle_group": "triceps"},
            {"date": "2026-10-21", "muscle_group": "chest"},
            {"date": "2026-10-21", "muscle_group": "chest", "completed": False},
            {"date": "2026-10-25", "muscle_group": "back"},
        ]
        log_path.write_text("\n".join(json.dumps(r) for r in records) + "\n")

        result = runner.invoke(app, [
            "volume", "week", str(log_path), "--week-of", "2026-10-22", "--json",
        ], env=home_env)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["week_of"] == "2026-10-22"
        assert data["muscles"] == [
            {"muscle_group": "chest", "weekly_sets": 3.0, "status": "below_mev"},
            {"muscle_group": "triceps", "weekly_sets": 1.0, "status": "below_mev"},
        ]

    def test_week_reports_bad_line(self, tmp_path, home_env):
        log_path = tmp_path / "sets.jsonl"
        log_path.write_text('{"date": "2026-10-19", "muscle_group": "chest"}\nnot json\n')
        result = runner.invoke(app, ["volume", "week", str(log_path)], env=home_env)
        assert result.exit_code == 1

    def test_week_missing_log(self, tmp_path):
        result = runner.invoke(app, ["volume", "week", str(tmp_path / "missing.jsonl")])
        assert result.exit_code == 1


class TestScheduleCommands:
    """schedule build / save / show / today."""

    def test_build_json(self):
        result = runner.invoke(app, ["schedule", "build", "1", "3", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"weekdays": [1, 3, 5]}

    def test_build_wraps_past_saturday(self):
        result = runner.invoke(app, ["schedule", "build", "5", "4"])
        assert result.exit_code == 0
        assert "Fri, Sat, Mon, Tue" in result.output

    def test_save_and_show(self, schedules_path):
        result = runner.invoke(app, [
            "schedule", "save", "ppl",
            "--weekdays", "1,3,5",
            "--start-date", "2026-10-19",
            "--schedules-path", str(schedules_path),
        ])
        assert result.exit_code == 0
        assert schedules_path.exists()

        result = runner.invoke(app, [
            "schedule", "show", "ppl", "--schedules-path", str(schedules_path), "--json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "split_id": "ppl",
            "start_date": "2026-10-19",
            "mode": "fixed",
            "weekdays": [1, 3, 5],
            "anchor_day": 1,
        }

    def test_save_rejects_bad_mode(self, schedules_path):
        result = runner.invoke(app, [
            "schedule", "save", "ppl", "--mode", "weekly",
            "--schedules-path", str(schedules_path),
        ])
        assert result.exit_code == 1
        assert not schedules_path.exists()

    def test_show_missing_schedule(self, schedules_path):
        result = runner.invoke(app, [
            "schedule", "show", "ppl", "--schedules-path", str(schedules_path),
        ])
        assert result.exit_code == 1

    @pytest.mark.parametrize("on_date,expected", [
        ("2026-10-19", "Push"),      # Monday
        ("2026-10-20", "rest day"),  # Tuesday
        ("2026-10-21", "Pull"),      # Wednesday
        ("2026-10-23", "Legs"),      # Friday
    ])
    def test_today_fixed(self, schedules_path, on_date, expected):
        runner.invoke(app, [
            "schedule", "save", "ppl",
            "--anchor", "1", "--per-week", "3",
            "--start-date", "2026-10-19",
            "--schedules-path", str(schedules_path),
        ])
        result = runner.invoke(app, [
            "schedule", "today", "ppl",
            "--days", "Push,Pull,Legs",
            "--date", on_date,
            "--schedules-path", str(schedules_path),
        ])
        assert result.exit_code == 0
        assert expected in result.output

    def test_today_flex_follows_completed_count(self, schedules_path):
        runner.invoke(app, [
            "schedule", "save", "ppl", "--mode", "flex",
            "--start-date", "2026-10-19",
            "--schedules-path", str(schedules_path),
        ])
        result = runner.invoke(app, [
            "schedule", "today", "ppl",
            "--days", "Push,Pull,Legs",
            "--date", "2026-10-20",
            "--completed", "4",
            "--schedules-path", str(schedules_path),
        ])
        assert result.exit_code == 0
        assert "Pull" in result.output


class TestNutritionCommands:
    """macros."""

    def test_macros_json(self):
        result = runner.invoke(app, [
            "macros", "--sex", "male", "--age", "30",
            "--weight", "80", "--height", "180", "--json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "calories": 2750,
            "protein": 145,
            "carbs": 375,
            "fat": 75,
            "tdee": 2750,
            "bmr": 1775,
        }

    def test_macros_table(self):
        result = runner.invoke(app, [
            "macros", "--sex", "female", "--age", "25",
            "--weight", "60", "--height", "165",
            "--activity", "sedentary", "--goal", "cut",
        ])
        assert result.exit_code == 0
        assert "1325 kcal" in result.output

    def test_macros_imperial_needs_feet(self):
        result = runner.invoke(app, [
            "macros", "--sex", "male", "--age", "30", "--weight", "176", "--imperial",
        ])
        assert result.exit_code == 1

    def test_macros_rejects_unknown_goal(self):
        result = runner.invoke(app, [
            "macros", "--sex", "male", "--age", "30",
            "--weight", "80", "--height", "180", "--goal", "bulk_hard",
        ])
        assert result.exit_code == 1


class TestProgramCommands:
    """recommend."""

    def test_recommend_json(self, home_env):
        result = runner.invoke(app, ["recommend", "--days", "4", "--json"], env=home_env)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["base_template"] == "Evidence Upper/Lower (4 days)"
        assert data["score"] == 75
        assert data["template"]["name"] == "Evidence Upper/Lower (4 days) · Guided"
        assert len(data["template"]["days"]) == 4

    def test_recommend_lower_focus_table(self, home_env):
        result = runner.invoke(app, ["recommend", "--focus", "lower_focus"], env=home_env)
        assert result.exit_code == 0
        assert "Lower Focus" in result.output

    @pytest.mark.parametrize("args", [
        ["--focus", "arms"],
        ["--equipment", "spaceship"],
        ["--days", "0"],
    ])
    def test_recommend_rejects_bad_answers(self, home_env, args):
        result = runner.invoke(app, ["recommend", *args], env=home_env)
        assert result.exit_code == 1
