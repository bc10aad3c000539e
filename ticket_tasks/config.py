"""Presets and the per-invocation configuration record.

Presets are the defaults that shape predicates but are never asked for
(does the GIT repo have a staging server, is there a team to review
PRs, ...). They are resolved once at startup, optionally from a JSON
file, and never mutated afterwards.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".ticket-tasks" / "config.json"
CONFIG_ENV_VAR = "TICKET_TASKS_CONFIG"

DEFAULT_REPOS: Mapping[str, str] = MappingProxyType({
    "git": "https://github.com/nicogreenarry/git",
    "hi": "https://github.com/captain401/provider",
})

# JSON key -> Presets attribute
PRESET_KEYS: dict[str, str] = {
    "hasGitTeam": "has_git_team",
    "gitHasStaging": "git_has_staging",
    "gitHasTesting": "git_has_testing",
    "hiStagingPreAcceptanceTesting": "hi_staging_pre_acceptance_testing",
}

COMPANIES = ("git", "hi")
WORK_TYPES = ("chore", "feature", "fix", "style")
TRACKERS = ("jira", "pivotal")


@dataclass(frozen=True)
class Presets:
    has_git_team: bool = False
    git_has_staging: bool = False
    git_has_testing: bool = False
    hi_staging_pre_acceptance_testing: bool = False
    repos: Mapping[str, str] = field(default_factory=lambda: DEFAULT_REPOS, hash=False)


@dataclass(frozen=True)
class Configuration:
    """Classification of one piece of work.

    Every flag defaults to False, so a field nobody set behaves as false
    in predicates.
    """

    git: bool = False
    hi: bool = False
    chore: bool = False
    feature: bool = False
    fix: bool = False
    style: bool = False
    jira: bool = False
    pivotal: bool = False
    ui: bool = False
    git_team: bool = False
    presets: Presets = field(default_factory=Presets)

    @classmethod
    def from_flags(cls, flags: Mapping[str, Any], presets: Presets | None = None) -> "Configuration":
        """Build from a loose mapping; absent or falsy entries become False."""
        names = [f.name for f in fields(cls) if f.name != "presets"]
        return cls(presets=presets or Presets(), **{n: bool(flags.get(n)) for n in names})

    @property
    def repo(self) -> str:
        return self.presets.repos["hi" if self.hi else "git"]


def parse_bool_flag(value: Any) -> bool:
    """`--ui` and `--ui true` both mean yes; anything else means no."""
    return value is True or value == "true"


# ──────────────────────────────────────────────
# Presets file
# ──────────────────────────────────────────────


def resolve_config_path(explicit: str | None = None) -> tuple[Path, bool]:
    """Return (path, required). Only an explicitly named file must exist."""
    if explicit:
        return Path(explicit).expanduser(), True
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser(), True
    return DEFAULT_CONFIG_PATH, False


def presets_from_dict(data: Mapping[str, Any], source: str = "<dict>") -> Presets:
    values: dict[str, Any] = {}
    for key, value in data.items():
        if key == "repos":
            if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
                raise SystemExit(f"invalid config {source}: 'repos' must map names to URLs")
            values["repos"] = MappingProxyType({**DEFAULT_REPOS, **value})
            continue
        attr = PRESET_KEYS.get(key)
        if attr is None:
            logger.warning("Ignoring unknown config key %r in %s", key, source)
            continue
        if not isinstance(value, bool):
            raise SystemExit(f"invalid config {source}: '{key}' must be true or false")
        values[attr] = value
    return Presets(**values)


def load_presets(explicit: str | None = None) -> Presets:
    path, required = resolve_config_path(explicit)
    if not path.exists():
        if required:
            raise SystemExit(f"config file not found: {path}")
        logger.debug("No config file at %s, using built-in presets", path)
        return Presets()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SystemExit(f"invalid config {path}: {e}")
    if not isinstance(data, dict):
        raise SystemExit(f"invalid config {path}: expected a JSON object")

    presets = presets_from_dict(data, str(path))
    logger.debug("Loaded presets from %s: %s", path, presets)
    return presets
