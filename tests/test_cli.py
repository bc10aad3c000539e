#!/usr/bin/env python3
"""End-to-end tests for ticket_tasks/cli.py."""

import json
import logging
import os
import sys
from unittest.mock import patch

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ticket_tasks import config as config_mod
from ticket_tasks.catalog import TEMPLATES_URL
from ticket_tasks.cli import LOG_LEVEL_ENV_VAR, __version__, main, resolve_log_level
from ticket_tasks.render import SECTION_SEPARATOR


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    monkeypatch.delenv(config_mod.CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    monkeypatch.setattr(config_mod, "DEFAULT_CONFIG_PATH", tmp_path / "absent" / "config.json")


def run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr()


def test_fully_flagged_run_does_not_prompt(capsys):
    with patch("builtins.input", side_effect=AssertionError("prompted")):
        code, out = run(capsys, "--hi", "--feature", "--jira", "--ui")

    assert code == 0
    lines = out.out.splitlines()
    assert lines[0].startswith("Task templates: ")
    assert "## Tasks prior to approval" in lines
    assert "# Create several versions of mockups for the thing I’m building" in lines


def test_pr_section_precedes_ticket_section(capsys):
    code, out = run(capsys, "--git", "--chore", "--pivotal", "--ui", "false")
    lines = out.out.splitlines()

    gap = next(i for i in range(len(lines)) if lines[i:i + 3] == SECTION_SEPARATOR)
    assert all(not line.startswith("# ") for line in lines[gap + 3:])
    assert "## Tasks after approval/merge" in lines[:gap]
    assert "Update docs based on this change? If so, post docs to #eng_learn after the PR exists." in lines[gap:]


def test_prompts_for_missing_answers(capsys):
    with patch("builtins.input", side_effect=["git", "style", "jira", "n"]) as ask:
        code, out = run(capsys)

    assert code == 0
    assert ask.call_count == 4
    assert "Just style fixes." in out.out


def test_yes_uses_defaults(capsys):
    with patch("builtins.input", side_effect=AssertionError("prompted")):
        code, out = run(capsys, "--yes")

    assert code == 0
    # hi + feature + pivotal
    assert "* [ ] Open circleCI tabs so I’ll immediately be notified of test failures" in out.out
    assert "* [ ] Once the final PR is merged, mark ticket Finished (for Chores, do this task last)" in out.out


def test_eof_exits_nonzero(capsys):
    with patch("builtins.input", side_effect=EOFError()):
        code, out = run(capsys)

    assert code == 1
    assert "Aborted" in out.err
    assert out.out.splitlines() == [f"Task templates: {TEMPLATES_URL}"]


def test_templates_link_printed_before_prompting(capsys):
    seen = []

    def ask(question):
        seen.append(capsys.readouterr().out)
        raise EOFError()

    with patch("builtins.input", side_effect=ask):
        main([])

    assert seen == [f"Task templates: {TEMPLATES_URL}\n"]


def test_git_team_flag_overrides_preset(tmp_path, capsys):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"hasGitTeam": True}))

    _, with_team = run(capsys, "--git", "--fix", "--jira", "--ui", "false", "--config", str(cfg))
    _, without = run(capsys, "--git", "--fix", "--jira", "--ui", "false", "--config", str(cfg), "--git-team", "false")

    assert "* [ ] Request review for PR" in with_team.out
    assert "* [ ] Request review for PR" not in without.out


def test_bare_git_team_flag(capsys):
    _, out = run(capsys, "--git", "--fix", "--jira", "--ui", "false", "--git-team")
    assert "* [ ] Get reviewer approval" in out.out


def test_same_flags_same_output(capsys):
    _, first = run(capsys, "--hi", "--fix", "--pivotal", "--ui")
    _, second = run(capsys, "--hi", "--fix", "--pivotal", "--ui")
    assert first.out == second.out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Tests: log level
# ---------------------------------------------------------------------------


class TestLogLevel:

    def test_default_is_warning(self):
        assert resolve_log_level(verbose=False) == logging.WARNING

    def test_verbose_is_debug(self):
        assert resolve_log_level(verbose=True) == logging.DEBUG

    @pytest.mark.parametrize("verbose", [False, True])
    def test_env_overrides_flag(self, monkeypatch, verbose):
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "info")
        assert resolve_log_level(verbose) == logging.INFO

    def test_unknown_level_exits_with_message(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "loud")
        with pytest.raises(SystemExit, match=f"invalid {LOG_LEVEL_ENV_VAR}: loud"):
            resolve_log_level(verbose=False)

    def test_unknown_level_stops_cli_before_output(self, monkeypatch, capsys):
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "loud")
        with pytest.raises(SystemExit, match="invalid"):
            main(["--hi", "--fix", "--jira", "--ui"])
        assert capsys.readouterr().out == ""
