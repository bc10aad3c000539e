#!/usr/bin/env python3
"""Print the ticket and PR checklist for a piece of work.

Usage:
    # Ask about anything not given on the command line
    ticket-tasks

    # Human Interest feature with UI work, tracked in Jira
    ticket-tasks --hi --feature --jira --ui

    # Non-interactive: accept the default for every unanswered question
    ticket-tasks --git --fix --yes

    # GIT PR reviewed by a teammate
    ticket-tasks --git --chore --pivotal --ui false --git-team
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from ticket_tasks.catalog import TEMPLATES_URL
from ticket_tasks.config import Configuration, load_presets, parse_bool_flag
from ticket_tasks.prompts import PromptAborted, fill_missing
from ticket_tasks.render import print_lines, render_checklist

__version__ = "0.0.1"

LOG_LEVEL_ENV_VAR = "TICKET_TASKS_LOG_LEVEL"

logger = logging.getLogger(__name__)


def resolve_log_level(verbose: bool) -> int:
    """WARNING by default, DEBUG with --verbose; the env var wins over both."""
    value = os.environ.get(LOG_LEVEL_ENV_VAR) or ("DEBUG" if verbose else "WARNING")
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise SystemExit(f"invalid {LOG_LEVEL_ENV_VAR}: {value}")
    return level


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=resolve_log_level(verbose),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ticket-tasks",
        description="Print the ticket and PR task checklist for a piece of work.",
    )
    parser.add_argument("-V", "--version", action="version", version=__version__)

    company = parser.add_argument_group("company")
    company.add_argument("-g", "--git", action="store_true", help="Get In Touch tasks")
    company.add_argument("--hi", action="store_true", help="Human Interest tasks")

    work = parser.add_argument_group("type of work")
    work.add_argument("-c", "--chore", action="store_true", help="Chore (improvements only devs will notice)")
    work.add_argument("-f", "--feature", action="store_true", help="Feature (adding business value)")
    work.add_argument("--fix", action="store_true", help="Fix (a bugfix)")
    work.add_argument("-s", "--style", action="store_true", help="Style (linting improvements and similar cleanup)")

    tracker = parser.add_argument_group("ticket location")
    tracker.add_argument("-j", "--jira", action="store_true", help="Jira ticket")
    tracker.add_argument("-p", "--pivotal", action="store_true", help="Pivotal ticket")

    parser.add_argument("-u", "--ui", nargs="?", const=True, default=None,
                        help="Whether there is any UI work involved (--ui, --ui true, --ui false)")
    parser.add_argument("--git-team", nargs="?", const=True, default=None,
                        help="Whether there are GIT team members, e.g. for reviewing PRs")
    parser.add_argument("--config", default=None,
                        help="Presets JSON file (default: $TICKET_TASKS_CONFIG or ~/.ticket-tasks/config.json)")
    parser.add_argument("--yes", "-y", action="store_true", help="Non-interactive mode (accept all defaults)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")
    return parser


def build_configuration(args: argparse.Namespace) -> Configuration:
    presets = load_presets(args.config)
    flags = fill_missing(vars(args).copy(), assume_defaults=args.yes)
    # --git-team overrides the preset only when given
    flags["git_team"] = presets.has_git_team if args.git_team is None else parse_bool_flag(args.git_team)
    return Configuration.from_flags(flags, presets)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    print(f"Task templates: {TEMPLATES_URL}")
    try:
        config = build_configuration(args)
    except PromptAborted as e:
        print(f"Aborted: {e}", file=sys.stderr)
        return 1

    logger.debug("Configuration: %s", config)
    print_lines(render_checklist(config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
