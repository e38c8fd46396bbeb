"""UI package - line input and prompt output."""

from askline.ui.cli_io import TerminalIO
from askline.ui.io import BufferedWriter, LineSource, PromptWriter, QueueLineSource

__all__ = ["BufferedWriter", "LineSource", "PromptWriter", "QueueLineSource", "TerminalIO"]
