from __future__ import annotations

import sys
from collections import namedtuple
from typing import Optional

import click

from .providers import AbstractConfirm
from .resolvers.exceptions import PromptError


class PromptConfig(
    namedtuple(
        "PromptConfig",
        "prefix prefix_color help_message err",
        defaults=(">", "bright_green", None, False),
    )
):
    """How a confirmation prompt is rendered.

    * `prefix` is printed before the question, styled with `prefix_color`
      (any color name ``click.style`` accepts). An empty prefix is omitted.
    * `help_message` is an optional hint shown above the question.
    * `err` sends the prompt to standard error instead of standard output.
    """

    def render(self, message: str) -> str:
        if not self.prefix:
            return message
        return f"{click.style(self.prefix, fg=self.prefix_color)} {message}"

    def with_help_message(self, help_message: Optional[str]) -> PromptConfig:
        return self._replace(help_message=help_message)


class ClickConfirm(AbstractConfirm):
    """Ask yes/no questions on the terminal."""

    def __init__(
        self,
        config: Optional[PromptConfig] = None,
        interactive: Optional[bool] = None,
    ) -> None:
        self.config = PromptConfig() if config is None else config
        self._interactive = interactive

    def is_interactive(self) -> bool:
        if self._interactive is not None:
            return self._interactive
        return sys.stdin is not None and sys.stdin.isatty()

    def confirm(self, message: str, default: bool) -> bool:
        if not self.is_interactive():
            raise PromptError(message, "standard input is not a terminal")
        if self.config.help_message:
            click.echo(
                click.style(f"[{self.config.help_message}]", dim=True),
                err=self.config.err,
            )
        try:
            return click.confirm(
                self.config.render(message),
                default=default,
                err=self.config.err,
            )
        except click.Abort as e:
            raise PromptError(message, "input aborted") from e


class FixedAnswer(AbstractConfirm):
    """Answer every question the same way, without asking anyone."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer

    def confirm(self, message: str, default: bool) -> bool:
        return self.answer
