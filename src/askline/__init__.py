"""askline - prompt, validate and re-ask on the console.

    import asyncio
    import askline

    name = asyncio.run(askline.prompt("Name: ", default="guest"))
    fruit = asyncio.run(askline.choose("Fruit: ", ["apple", "orange"]))
    ok = asyncio.run(askline.confirm("Continue? "))
"""

from askline.config import Config
from askline.controller import RetryController, RetrySignal
from askline.errors import (
    AsklineError,
    ConfigurationFault,
    InvalidChoice,
    PromptCancelled,
    ValidationFailure,
)
from askline.models import MISSING, Attempt, PromptOptions, PromptRequest
from askline.prompter import (
    Prompter,
    choose,
    confirm,
    get_default_prompter,
    password,
    prompt,
    set_default_prompter,
)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "AsklineError",
    "Attempt",
    "Config",
    "ConfigurationFault",
    "InvalidChoice",
    "PromptCancelled",
    "PromptOptions",
    "PromptRequest",
    "Prompter",
    "RetryController",
    "RetrySignal",
    "ValidationFailure",
    "choose",
    "confirm",
    "get_default_prompter",
    "password",
    "prompt",
    "set_default_prompter",
]
