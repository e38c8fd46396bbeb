"""Single choice from a fixed list of options."""

from __future__ import annotations

from typing import Any, Sequence

from askline.controller import RetryController
from askline.errors import ConfigurationFault, InvalidChoice
from askline.models import PromptOptions, Validator


def choice_hint(choices: Sequence[str]) -> str:
    return f"Valid choices: {', '.join(choices)}"


def match_choice(candidate: str, choices: Sequence[str]) -> str:
    """Return the canonical member of ``choices`` matching ``candidate``.

    Matching ignores case and surrounding whitespace. Raises InvalidChoice
    when nothing matches.
    """
    needle = candidate.strip().casefold()
    for choice in choices:
        if choice.casefold() == needle:
            return choice
    raise InvalidChoice(candidate, choices)


def choice_validator(choices: Sequence[str], then: PromptOptions | None = None) -> Validator:
    """Build a validator accepting only members of ``choices``.

    Validators already configured on ``then`` run afterwards on the canonical
    member.
    """
    chained = then.validators if then is not None else ()

    def validate(candidate: Any) -> Any:
        value: Any = match_choice(str(candidate), choices)
        for validator in chained:
            value = validator(value)
        return value

    return validate


def check_choices(choices: Sequence[str]) -> list[str]:
    if isinstance(choices, str):
        raise ConfigurationFault("choices must be a sequence of strings, not a string")
    result = list(choices)
    if not result:
        raise ConfigurationFault("choices must not be empty")
    for choice in result:
        if not isinstance(choice, str):
            raise ConfigurationFault(f"choice {choice!r} is not a string")
    return result


async def choose(
    controller: RetryController,
    prompt_text: str,
    choices: Sequence[str],
    options: PromptOptions | None = None,
) -> Any:
    """Ask until the user types one of ``choices`` (any case).

    Returns the option as spelled in ``choices``. After a rejected answer the
    prompt is preceded by a line listing the valid options.
    """
    valid = check_choices(choices)
    options = options or PromptOptions()
    return await controller.ask(
        prompt_text,
        options.evolve(validator=choice_validator(valid, options)),
        hint=choice_hint(valid),
    )
