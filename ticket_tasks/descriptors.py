"""Task descriptors: an optional inclusion test plus renderable text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

from ticket_tasks.config import Configuration

Predicate = Callable[[Configuration], bool]


@dataclass(frozen=True)
class Literal:
    text: str

    def render(self, config: Configuration) -> str:
        return self.text


@dataclass(frozen=True)
class Template:
    """Text that depends on the configuration (wording, links, plurals)."""

    build: Callable[[Configuration], str]

    def render(self, config: Configuration) -> str:
        return self.build(config)


Message = Union[Literal, Template]


@dataclass(frozen=True)
class TaskDescriptor:
    message: Message
    test: Optional[Predicate] = None
    header: bool = False

    def applies(self, config: Configuration) -> bool:
        return self.test is None or bool(self.test(config))


def task(message: str | Callable[[Configuration], str], test: Predicate | None = None) -> TaskDescriptor:
    """Shorthand for catalog entries: plain strings become literals, callables templates."""
    body = Literal(message) if isinstance(message, str) else Template(message)
    return TaskDescriptor(message=body, test=test)


def header(message: str) -> TaskDescriptor:
    return TaskDescriptor(message=Literal(message), header=True)


@dataclass(frozen=True)
class TaskCatalog:
    generic: tuple[TaskDescriptor, ...] = ()
    ticket: tuple[TaskDescriptor, ...] = ()
    pr: tuple[TaskDescriptor, ...] = ()

    @property
    def all_ticket_tasks(self) -> tuple[TaskDescriptor, ...]:
        return self.generic + self.ticket

    @property
    def all_pr_tasks(self) -> tuple[TaskDescriptor, ...]:
        return self.generic + self.pr
