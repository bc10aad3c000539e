"""Select the tasks that apply to a configuration and render them as markdown."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Sequence

from ticket_tasks.catalog import DEFAULT_CATALOG
from ticket_tasks.config import Configuration
from ticket_tasks.descriptors import TaskCatalog, TaskDescriptor

logger = logging.getLogger(__name__)

PR_HEADER_PREFIX = "## "
PR_ITEM_PREFIX = "* [ ] "
# Jira renders "# " as a numbered list item; Pivotal tasks take plain text
JIRA_ITEM_PREFIX = "# "

# Printed between the PR checklist and the ticket checklist
SECTION_SEPARATOR = ["", "", ""]


def select_tasks(config: Configuration, descriptors: Iterable[TaskDescriptor]) -> Iterator[TaskDescriptor]:
    """Yield descriptors whose test passes, in list order."""
    for descriptor in descriptors:
        if descriptor.applies(config):
            yield descriptor


def render_tasks(
    config: Configuration,
    descriptors: Iterable[TaskDescriptor],
    item_prefix: str,
    header_prefix: str = "",
) -> list[str]:
    """Render applicable descriptors. Messages are only built after the filter."""
    lines = []
    for descriptor in select_tasks(config, descriptors):
        prefix = header_prefix if descriptor.header else item_prefix
        lines.append(f"{prefix}{descriptor.message.render(config)}")
    return lines


def ticket_item_prefix(config: Configuration) -> str:
    return JIRA_ITEM_PREFIX if config.jira else ""


def render_pr_tasks(config: Configuration, catalog: TaskCatalog = DEFAULT_CATALOG) -> list[str]:
    return render_tasks(config, catalog.all_pr_tasks, PR_ITEM_PREFIX, PR_HEADER_PREFIX)


def render_ticket_tasks(config: Configuration, catalog: TaskCatalog = DEFAULT_CATALOG) -> list[str]:
    return render_tasks(config, catalog.all_ticket_tasks, ticket_item_prefix(config))


def render_checklist(config: Configuration, catalog: TaskCatalog = DEFAULT_CATALOG) -> list[str]:
    """PR checklist, separator, ticket checklist."""
    pr_lines = render_pr_tasks(config, catalog)
    ticket_lines = render_ticket_tasks(config, catalog)
    logger.debug(
        "Selected %d/%d PR tasks and %d/%d ticket tasks",
        len(pr_lines), len(catalog.all_pr_tasks),
        len(ticket_lines), len(catalog.all_ticket_tasks),
    )
    return [*pr_lines, *SECTION_SEPARATOR, *ticket_lines]


def print_lines(lines: Sequence[str]) -> None:
    for line in lines:
        print(line)
