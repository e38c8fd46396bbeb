"""Yes/no confirmation prompts."""

from __future__ import annotations

from typing import Any

from askline.choice import choose
from askline.controller import RetryController
from askline.models import PromptOptions

AFFIRMATIVE = ("y", "yes", "1")
NEGATIVE = ("n", "no", "0")
CONFIRM_CHOICES = AFFIRMATIVE + NEGATIVE


def coerce_confirm(token: str) -> bool:
    """Map a confirm vocabulary token to a boolean."""
    return token.casefold() in AFFIRMATIVE


async def confirm(
    controller: RetryController,
    prompt_text: str,
    options: PromptOptions | None = None,
) -> Any:
    """Ask a yes/no question; returns True or False.

    Accepts y/yes/1 and n/no/0 in any case. A configured default is returned
    as-is for empty input. A caller validator sees the coerced boolean.
    """
    options = options or PromptOptions()
    then = options.validators

    def to_bool(token: str) -> Any:
        value: Any = coerce_confirm(token)
        for validator in then:
            value = validator(value)
        return value

    return await choose(
        controller,
        prompt_text,
        CONFIRM_CHOICES,
        options.evolve(validator=to_bool),
    )
