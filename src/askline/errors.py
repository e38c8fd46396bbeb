from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from askline.controller import RetrySignal


class AsklineError(Exception):
    """Base exception for all askline errors."""


class ValidationFailure(AsklineError):
    """A candidate was rejected.

    Raised by validators, or wrapped around whatever they raised. When it
    reaches the caller because retrying was disabled, ``retry`` holds a
    one-shot signal that runs one more attempt of the same prompt.
    """

    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        self.retry: RetrySignal | None = None
        super().__init__(reason)


class InvalidChoice(ValidationFailure):
    def __init__(self, candidate: str, choices: Sequence[str]) -> None:
        self.candidate = candidate
        self.choices = list(choices)
        super().__init__(
            f"Invalid choice '{candidate}'. Valid choices: {', '.join(self.choices)}"
        )


class ConfigurationFault(AsklineError):
    """Raised before any I/O when a prompt is set up wrongly."""


class PromptCancelled(AsklineError):
    def __init__(self, prompt_text: str, attempts: int) -> None:
        self.prompt_text = prompt_text
        self.attempts = attempts
        super().__init__(f"Prompt cancelled after {attempts} attempt(s): {prompt_text!r}")


__all__ = [
    "AsklineError",
    "ValidationFailure",
    "InvalidChoice",
    "ConfigurationFault",
    "PromptCancelled",
]
