"""Prompter facade - ties the I/O pair, config and resolvers together."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

from askline import choice as _choice
from askline import confirm as _confirm
from askline.config import Config
from askline.controller import RetryController
from askline.models import MISSING, ValidatorSpec
from askline.ui.cli_io import TerminalIO
from askline.ui.io import LineSource, PromptWriter


class Prompter:
    """Free text, password, choice and confirm prompts over one I/O pair.

    Without an explicit source/writer, a TerminalIO serves as both.
    Options left as None take their value from ``config``.
    """

    def __init__(
        self,
        source: LineSource | None = None,
        writer: PromptWriter | None = None,
        *,
        config: Config | None = None,
    ):
        if source is None or writer is None:
            terminal = TerminalIO()
            if source is None:
                source = terminal
            if writer is None:
                writer = terminal
        self.config = config or Config()
        self.controller = RetryController(source, writer)

    async def prompt(
        self,
        prompt_text: str,
        *,
        default: Any = MISSING,
        trim: bool | None = None,
        validator: ValidatorSpec = None,
        retry: bool | None = None,
        silent: bool = False,
        show_reason: bool | None = None,
        cancel: asyncio.Event | None = None,
    ) -> Any:
        options = self.config.prompt_options(
            default=default,
            trim=trim,
            validator=validator,
            retry=retry,
            silent=silent,
            show_reason=show_reason,
            cancel=cancel,
        )
        return await self.controller.ask(prompt_text, options)

    async def password(
        self,
        prompt_text: str,
        *,
        default: Any = MISSING,
        trim: bool = False,
        validator: ValidatorSpec = None,
        retry: bool | None = None,
        show_reason: bool | None = None,
        cancel: asyncio.Event | None = None,
    ) -> Any:
        """Like prompt(), but silent and untrimmed unless asked otherwise."""
        return await self.prompt(
            prompt_text,
            default=default,
            trim=trim,
            validator=validator,
            retry=retry,
            silent=True,
            show_reason=show_reason,
            cancel=cancel,
        )

    async def choose(
        self,
        prompt_text: str,
        choices: Sequence[str],
        *,
        default: Any = MISSING,
        trim: bool | None = None,
        validator: ValidatorSpec = None,
        retry: bool | None = None,
        show_reason: bool | None = None,
        cancel: asyncio.Event | None = None,
    ) -> Any:
        options = self.config.prompt_options(
            default=default,
            trim=trim,
            validator=validator,
            retry=retry,
            show_reason=show_reason,
            cancel=cancel,
        )
        return await _choice.choose(self.controller, prompt_text, choices, options)

    async def confirm(
        self,
        prompt_text: str,
        *,
        default: Any = MISSING,
        trim: bool | None = None,
        validator: ValidatorSpec = None,
        retry: bool | None = None,
        show_reason: bool | None = None,
        cancel: asyncio.Event | None = None,
    ) -> Any:
        options = self.config.prompt_options(
            default=default,
            trim=trim,
            validator=validator,
            retry=retry,
            show_reason=show_reason,
            cancel=cancel,
        )
        return await _confirm.confirm(self.controller, prompt_text, options)


_default_prompter: Prompter | None = None


def get_default_prompter() -> Prompter:
    """Terminal-backed prompter used by the module-level functions."""
    global _default_prompter
    if _default_prompter is None:
        config = Config.load()
        if config.logging_requested:
            config.setup_logging()
        _default_prompter = Prompter(config=config)
    return _default_prompter


def set_default_prompter(prompter: Prompter | None) -> None:
    """Replace (or with None, reset) the module-level prompter."""
    global _default_prompter
    _default_prompter = prompter


async def prompt(prompt_text: str, **options: Any) -> Any:
    """Ask for a line of free text."""
    return await get_default_prompter().prompt(prompt_text, **options)


async def password(prompt_text: str, **options: Any) -> Any:
    """Ask for a line of text without echoing it."""
    return await get_default_prompter().password(prompt_text, **options)


async def choose(prompt_text: str, choices: Sequence[str], **options: Any) -> Any:
    """Ask for one of ``choices``."""
    return await get_default_prompter().choose(prompt_text, choices, **options)


async def confirm(prompt_text: str, **options: Any) -> Any:
    """Ask a yes/no question."""
    return await get_default_prompter().confirm(prompt_text, **options)
