"""Tests for the line source / prompt writer bindings."""

from __future__ import annotations

import asyncio
import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console as RichConsole

from askline.ui.cli_io import TerminalIO
from askline.ui.io import BufferedWriter, LineSource, PromptWriter, QueueLineSource


# ===================================================================
# QueueLineSource
# ===================================================================


class TestQueueLineSource:
    def test_splits_chunks_into_lines(self):
        source = QueueLineSource()
        source.feed("a\nb\n")

        async def _run():
            return [await source.read_line(), await source.read_line()]

        assert asyncio.run(_run()) == ["a", "b"]

    def test_partial_line_held_until_newline(self):
        source = QueueLineSource()
        source.feed("hel")
        assert source.pending == 0
        source.feed("lo\n")
        assert source.pending == 1
        assert asyncio.run(source.read_line()) == "hello"

    def test_crlf_normalised(self):
        source = QueueLineSource()
        source.feed("yes\r\n")
        assert asyncio.run(source.read_line()) == "yes"

    def test_read_waits_for_feed(self):
        async def _run():
            source = QueueLineSource()
            loop = asyncio.get_running_loop()
            loop.call_later(0.01, source.feed, "late\n")
            return await source.read_line()

        assert asyncio.run(_run()) == "late"

    def test_close_flushes_partial_then_eof(self):
        source = QueueLineSource()
        source.feed("tail")
        source.close()

        async def _run():
            first = await source.read_line()
            with pytest.raises(EOFError):
                await source.read_line()
            with pytest.raises(EOFError):
                await source.read_line()
            return first

        assert asyncio.run(_run()) == "tail"

    def test_feed_after_close_fails(self):
        source = QueueLineSource()
        source.close()
        with pytest.raises(EOFError):
            source.feed("x\n")

    def test_satisfies_protocol(self):
        assert isinstance(QueueLineSource(), LineSource)


class TestBufferedWriter:
    def test_transcript(self):
        writer = BufferedWriter()
        writer.write("a: ")
        writer.write_line("hint")
        writer.write("a: ")
        assert writer.output == "a: hint\na: "
        assert writer.count("a: ") == 2

    def test_echo_tracking(self):
        writer = BufferedWriter()
        writer.set_echo(False)
        assert writer.echo is False
        writer.set_echo(True)
        assert writer.echo_changes == [False, True]

    def test_satisfies_protocol(self):
        assert isinstance(BufferedWriter(), PromptWriter)


# ===================================================================
# TerminalIO
# ===================================================================


def _terminal():
    session = MagicMock()
    session.prompt_async = AsyncMock(return_value="typed")
    out = io.StringIO()
    console = RichConsole(file=out, force_terminal=False, width=80)
    return TerminalIO(console=console, session=session), session, out


class TestTerminalIO:
    def test_prompt_text_passed_as_message(self):
        term, session, _ = _terminal()
        term.write("Name: ")
        assert asyncio.run(term.read_line()) == "typed"
        session.prompt_async.assert_awaited_once_with("Name: ", is_password=False)

    def test_pending_prompt_cleared_after_read(self):
        term, session, _ = _terminal()
        term.write("Name: ")
        asyncio.run(term.read_line())
        asyncio.run(term.read_line())
        assert session.prompt_async.await_args_list[-1].args == ("",)

    def test_no_echo_reads_as_password(self):
        term, session, _ = _terminal()
        term.set_echo(False)
        term.write("Password: ")
        asyncio.run(term.read_line())
        session.prompt_async.assert_awaited_once_with("Password: ", is_password=True)

    def test_write_line_prints_through_console(self):
        term, _, out = _terminal()
        term.write_line("Valid choices: a, b")
        assert "Valid choices: a, b" in out.getvalue()

    def test_write_line_flushes_pending_prompt(self):
        term, session, out = _terminal()
        term.write("partial ")
        term.write_line("[not markup]")
        assert out.getvalue().startswith("partial ")
        assert "[not markup]" in out.getvalue()
        asyncio.run(term.read_line())
        session.prompt_async.assert_awaited_once_with("", is_password=False)

    def test_satisfies_both_protocols(self):
        term, _, _ = _terminal()
        assert isinstance(term, LineSource)
        assert isinstance(term, PromptWriter)
