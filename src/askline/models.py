"""Value objects passed around a single prompt interaction."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Sequence, Union

from askline.errors import ConfigurationFault, ValidationFailure


class _Missing:
    """Marker for "no default configured" (None is a valid default)."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

Validator = Callable[[Any], Any]
ValidatorSpec = Union[Validator, Sequence[Validator], None]


@dataclass(frozen=True)
class PromptOptions:
    """Per-call prompt configuration."""

    default: Any = MISSING
    trim: bool = True
    validator: ValidatorSpec = None
    retry: bool = True
    silent: bool = False
    show_reason: bool = False
    cancel: asyncio.Event | None = None

    def __post_init__(self):
        if self.validator is None or callable(self.validator):
            return
        if isinstance(self.validator, (str, bytes)):
            raise ConfigurationFault("validator must be callable or a sequence of callables")
        try:
            validators = tuple(self.validator)
        except TypeError:
            raise ConfigurationFault(
                "validator must be callable or a sequence of callables"
            ) from None
        for v in validators:
            if not callable(v):
                raise ConfigurationFault(f"validator {v!r} is not callable")
        object.__setattr__(self, "validator", validators)

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def validators(self) -> tuple[Validator, ...]:
        if self.validator is None:
            return ()
        if callable(self.validator):
            return (self.validator,)
        return tuple(self.validator)

    def evolve(self, **changes: Any) -> PromptOptions:
        return replace(self, **changes)


@dataclass(frozen=True)
class PromptRequest:
    prompt_text: str
    options: PromptOptions = field(default_factory=PromptOptions)
    hint: str | None = None  # shown before re-prompting after a rejection


@dataclass
class Attempt:
    """State of one prompt/read/validate cycle."""

    number: int
    raw: str = ""
    candidate: str = ""
    defaulted: bool = False
    value: Any = None
    failure: ValidationFailure | None = None
    accepted: bool = False

    @property
    def empty(self) -> bool:
        """Empty input with no default: not accepted, nothing to report."""
        return not self.accepted and self.failure is None

    @property
    def outcome(self) -> str:
        if self.accepted:
            return "defaulted" if self.defaulted else "accepted"
        if self.failure is not None:
            return "rejected"
        return "empty"
