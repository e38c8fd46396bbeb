"""Terminal implementation of LineSource/PromptWriter using Rich + prompt_toolkit."""

from __future__ import annotations

from prompt_toolkit import PromptSession
from rich.console import Console as RichConsole


class TerminalIO:
    """Reads lines with prompt_toolkit and prints hints with Rich.

    Prompt text written through ``write`` is held until the next read and
    handed to prompt_toolkit as the input message, so redraws keep it on
    the same line as the cursor.
    """

    def __init__(
        self,
        console: RichConsole | None = None,
        session: PromptSession | None = None,
    ):
        self._console = console or RichConsole(highlight=False)
        self._session = session
        self._pending = ""
        self._echo = True

    @property
    def session(self) -> PromptSession:
        # Created on first read: building a session probes the output device.
        if self._session is None:
            self._session = PromptSession()
        return self._session

    @property
    def echo(self) -> bool:
        return self._echo

    def write(self, text: str) -> None:
        self._pending += text

    def write_line(self, text: str) -> None:
        self._flush_pending()
        self._console.print(text, style="yellow", markup=False)

    def set_echo(self, enabled: bool) -> None:
        self._echo = enabled

    async def read_line(self) -> str:
        message, self._pending = self._pending, ""
        return await self.session.prompt_async(
            message,
            is_password=not self._echo,
        )

    def _flush_pending(self) -> None:
        if self._pending:
            self._console.print(self._pending, end="", markup=False)
            self._pending = ""
