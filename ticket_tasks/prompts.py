"""Ask for whatever the command-line flags left unanswered."""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping, Sequence

from ticket_tasks.config import COMPANIES, TRACKERS, WORK_TYPES, parse_bool_flag

logger = logging.getLogger(__name__)


class PromptError(Exception):
    pass


class PromptAborted(PromptError):
    """Input ended before a question was answered."""


def choice_validator(choices: Sequence[str], message: str) -> Callable[[str], str]:
    def validate(value: str) -> str:
        if value in choices:
            return value
        raise ValueError(message)
    return validate


def prompt(
    question: str,
    default: str,
    validator: Callable[[str], str],
    ask: Callable[[str], str] | None = None,
) -> str:
    """Ask until the answer validates. An empty answer takes the default."""
    while True:
        try:
            answer = (ask or input)(f"{question} ").strip()
        except EOFError:
            raise PromptAborted(f"no answer to: {question}") from None
        try:
            return validator(answer or default)
        except ValueError as e:
            print(e, file=sys.stderr)


def fill_missing(
    flags: MutableMapping[str, Any],
    assume_defaults: bool = False,
    ask: Callable[[str], str] | None = None,
) -> MutableMapping[str, Any]:
    """Set one flag per unanswered question on `flags` and return it.

    With `assume_defaults` every question takes its default without asking.
    """

    def answer(question: str, default: str, validator: Callable[[str], str]) -> str:
        if assume_defaults:
            return default
        return prompt(question, default, validator, ask)

    if not any(flags.get(c) for c in COMPANIES):
        company = answer(
            "Is this work for Human Interest (hi) or Get In Touch (git)? [hi]",
            "hi",
            choice_validator(COMPANIES, 'Value must be either "git" or "hi".'),
        )
        flags[company] = True

    if not any(flags.get(w) for w in WORK_TYPES):
        work_type = answer(
            "What type of work is this? chore, feature, fix, style? [feature]",
            "feature",
            choice_validator(WORK_TYPES, "Value must be one of chore, feature, fix, style."),
        )
        flags[work_type] = True

    if not any(flags.get(t) for t in TRACKERS):
        tracker = answer(
            "Where does the ticket/task live? jira, pivotal? [pivotal]",
            "pivotal",
            choice_validator(TRACKERS, "Value must be one of jira, pivotal."),
        )
        flags[tracker] = True

    # None means the --ui flag was not used at all
    if flags.get("ui") is None:
        ui = answer(
            "Does this work involve any UI work (y/n)? [n]",
            "n",
            choice_validator(("y", "n"), "Value must be either y/n."),
        )
        flags["ui"] = ui == "y"
    else:
        flags["ui"] = parse_bool_flag(flags["ui"])

    logger.debug("Resolved flags: %s", dict(flags))
    return flags
