"""Profile loading and completeness checks."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from autoapply.tracker.models import UserProfile, UserProfilePatch


def load_profile_patch(path: Path | str) -> UserProfilePatch:
    """Load a profile update from a YAML or JSON file.

    Keys may be snake_case or camelCase. Only the keys present in the file
    are applied when the patch is merged.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a mapping or cannot be parsed.
        pydantic.ValidationError: If the mapping has unknown or invalid fields.
    """
    profile_path = Path(path)
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    suffix = profile_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = _load_yaml(profile_path)
    elif suffix == ".json":
        data = _load_json(profile_path)
    else:
        data = _load_unknown(profile_path)

    return UserProfilePatch.model_validate(data)


def profile_warnings(profile: UserProfile) -> list[str]:
    """Return warnings for an incomplete profile."""
    warnings: list[str] = []

    if not profile.name.strip():
        warnings.append("Missing name")
    if "@" not in profile.email:
        warnings.append("Missing or invalid email")
    if not profile.resume_content:
        warnings.append("No resume uploaded; job search needs resume text")
    if not profile.preferences.job_titles.strip():
        warnings.append("No preferred job titles")
    for label, url in (
        ("LinkedIn", profile.linkedin_url),
        ("GitHub", profile.github_url),
        ("Portfolio", profile.portfolio_url),
    ):
        if url and not url.startswith(("http://", "https://")):
            warnings.append(f"{label} URL is not a valid URL")

    return warnings


def _load_yaml(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML profile: {path}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a mapping/dict: {path}")
    return data


def _load_json(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON profile: {path}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a mapping/dict: {path}")
    return data


def _load_unknown(path: Path) -> dict:
    """Auto-detect JSON or YAML when the extension is unknown."""
    raw = path.read_text(encoding="utf-8")

    if raw.lstrip().startswith("{"):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            data = None
        else:
            if not isinstance(data, dict):
                raise ValueError(f"Profile must be a mapping/dict: {path}")
            return data

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid profile format: {path}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a mapping/dict: {path}")
    return data
