"""
YAML → volume landmark and split template loader.

Loads weekly volume landmarks from landmarks.yaml (bundled with the
package) and optionally merges user overrides from
~/.iron-log/landmarks.yaml. Split templates for the program
designer load the same way from split_templates.yaml.

Usage:
    from iron_log.core.config_loader import load_volume_landmarks
    landmarks = load_volume_landmarks()
    chest = landmarks["chest"]

A user file that cannot be parsed is ignored with a warning. A landmark
entry whose thresholds are missing or out of order is skipped with a
warning; the remaining entries still load.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from .models import SplitTemplate, TemplateDay, TemplateExercise, VolumeLandmark
from .volume import validate_landmark

_REQUIRED_LANDMARK_FIELDS: frozenset[str] = frozenset({"mev", "mav_low", "mav_high", "mrv"})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"iron-log: ignoring {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def landmark_from_dict(muscle_group: str, d: dict) -> VolumeLandmark:
    """Convert a raw YAML mapping to a validated VolumeLandmark.

    Raises ValueError if a threshold is missing, non-numeric or out of order.
    """
    missing = _REQUIRED_LANDMARK_FIELDS - set(d)
    if missing:
        raise ValueError(f"{muscle_group}: landmark missing fields {sorted(missing)}")
    try:
        landmark = VolumeLandmark(
            muscle_group=muscle_group,
            mev=float(d["mev"]),
            mav_low=float(d["mav_low"]),
            mav_high=float(d["mav_high"]),
            mrv=float(d["mrv"]),
            mv=float(d.get("mv", 0)),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{muscle_group}: non-numeric landmark ({exc})") from exc
    return validate_landmark(landmark)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_config_dir() -> Path:
    """Return ~/.iron-log (not created here)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".iron-log"


def get_bundled_landmarks_text() -> str:
    """Return the bundled landmarks.yaml contents."""
    ref = importlib.resources.files("iron_log.core").joinpath("data/landmarks.yaml")
    return ref.read_text(encoding="utf-8")


def get_user_landmarks_path() -> Path | None:
    """Return ~/.iron-log/landmarks.yaml if it exists, else None."""
    p = get_config_dir() / "landmarks.yaml"
    return p if p.exists() else None


def load_volume_landmarks(user_path: Path | None = None) -> dict[str, VolumeLandmark]:
    """
    Load and merge volume landmarks from YAML sources.

    Load order (later overrides earlier):
    1. Bundled iron_log/core/data/landmarks.yaml
    2. User override (user_path, or ~/.iron-log/landmarks.yaml)

    Returns:
        Dict of muscle_group → VolumeLandmark
    """
    config: dict[str, Any] = yaml.safe_load(get_bundled_landmarks_text()) or {}

    if user_path is None:
        user_path = get_user_landmarks_path()
    if user_path is not None:
        user_cfg = _load_yaml_file(user_path)
        if user_cfg:
            config = _deep_merge(config, user_cfg)

    result: dict[str, VolumeLandmark] = {}
    for muscle_group, raw in (config.get("landmarks") or {}).items():
        if not isinstance(raw, dict):
            warnings.warn(f"iron-log: skipping landmark '{muscle_group}'", stacklevel=2)
            continue
        try:
            result[str(muscle_group)] = landmark_from_dict(str(muscle_group), raw)
        except ValueError as exc:
            warnings.warn(f"iron-log: skipping landmark '{muscle_group}' ({exc})", stacklevel=2)

    return result


# ---------------------------------------------------------------------------
# Split templates
# ---------------------------------------------------------------------------

_REQUIRED_TEMPLATE_FIELDS: frozenset[str] = frozenset({"name", "days_per_week", "days"})
_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset({"name", "sets", "reps_min", "reps_max"})


def _exercise_from_dict(d: dict) -> TemplateExercise:
    if not isinstance(d, dict):
        raise ValueError(f"exercise must be a mapping, got {d!r}")
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"exercise missing fields {sorted(missing)}")
    return TemplateExercise(
        name=str(d["name"]),
        sets=int(d["sets"]),
        reps_min=int(d["reps_min"]),
        reps_max=int(d["reps_max"]),
    )


def template_from_dict(d: dict) -> SplitTemplate:
    """Convert a raw YAML mapping to a SplitTemplate.

    Raises ValueError if a required field is absent or malformed.
    """
    if not isinstance(d, dict):
        raise ValueError(f"template must be a mapping, got {d!r}")
    missing = _REQUIRED_TEMPLATE_FIELDS - set(d)
    if missing:
        raise ValueError(f"template missing fields {sorted(missing)}")

    evidence = d.get("evidence")
    evidence_label = (
        str(evidence.get("label") or "evidence") if isinstance(evidence, dict) else None
    )

    try:
        days = tuple(
            TemplateDay(
                day_name=str(day["day_name"]),
                muscle_groups=tuple(str(m) for m in day.get("muscle_groups") or ()),
                exercises=tuple(_exercise_from_dict(e) for e in day.get("exercises") or ()),
            )
            for day in d["days"]
        )
        return SplitTemplate(
            name=str(d["name"]),
            description=str(d.get("description", "")),
            days_per_week=int(d["days_per_week"]),
            days=days,
            evidence_label=evidence_label,
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"{d.get('name')}: malformed template ({exc})") from exc


def get_bundled_templates_text() -> str:
    """Return the bundled split_templates.yaml contents."""
    ref = importlib.resources.files("iron_log.core").joinpath("data/split_templates.yaml")
    return ref.read_text(encoding="utf-8")


def get_user_templates_path() -> Path | None:
    """Return ~/.iron-log/split_templates.yaml if it exists, else None."""
    p = get_config_dir() / "split_templates.yaml"
    return p if p.exists() else None


def load_split_templates(user_path: Path | None = None) -> list[SplitTemplate]:
    """
    Load split templates from YAML sources.

    Bundled templates come first, in file order. A user template whose
    name matches a bundled one replaces it in place; other user templates
    are appended.

    Returns:
        List of SplitTemplate
    """
    raw_templates = list((yaml.safe_load(get_bundled_templates_text()) or {}).get("templates") or [])

    if user_path is None:
        user_path = get_user_templates_path()
    if user_path is not None:
        user_cfg = _load_yaml_file(user_path)
        for entry in user_cfg.get("templates") or []:
            name = entry.get("name") if isinstance(entry, dict) else None
            index = next(
                (
                    i for i, t in enumerate(raw_templates)
                    if name is not None and isinstance(t, dict) and t.get("name") == name
                ),
                None,
            )
            if index is None:
                raw_templates.append(entry)
            else:
                raw_templates[index] = entry

    result: list[SplitTemplate] = []
    for raw in raw_templates:
        try:
            result.append(template_from_dict(raw))
        except ValueError as exc:
            warnings.warn(f"iron-log: skipping split template ({exc})", stacklevel=2)

    return result
