"""Retry controller: the ask -> read -> validate -> re-ask loop.

Every prompt kind (free text, password, choice, confirm) runs through
RetryController.ask(). One call resolves to exactly one accepted value or
raises exactly one final error:

    1. Show the prompt (after a hint/reason if the last candidate was rejected)
    2. Read a line, with echo suppressed for silent prompts
    3. Trim, then substitute the default for empty input
    4. Run the validator pipeline on non-empty input
    5. Accept, re-ask, or raise ValidationFailure with a RetrySignal attached

Empty input without a default is always re-asked, whatever ``retry`` says.
"""

from __future__ import annotations

from typing import Any

from askline.errors import ConfigurationFault, PromptCancelled, ValidationFailure
from askline.log import log_attempt, log_resolution
from askline.models import Attempt, PromptOptions, PromptRequest
from askline.ui.io import LineSource, PromptWriter


class RetrySignal:
    """One-shot continuation attached to a final ValidationFailure.

    Awaiting ``signal()`` runs exactly one more attempt of the same request,
    as if the rejected attempt had been retried automatically. If that attempt
    is rejected too, a new ValidationFailure carrying a new signal is raised.
    """

    def __init__(
        self,
        controller: RetryController,
        request: PromptRequest,
        failure: ValidationFailure,
    ) -> None:
        self._controller = controller
        self._request = request
        self._failure = failure
        self._used = False

    @property
    def request(self) -> PromptRequest:
        return self._request

    @property
    def used(self) -> bool:
        return self._used

    async def __call__(self) -> Any:
        if self._used:
            raise ConfigurationFault("retry signal already used")
        self._used = True
        return await self._controller._run(self._request, rejected=self._failure)

    def __repr__(self) -> str:
        state = "used" if self._used else "armed"
        return f"RetrySignal({self._request.prompt_text!r}, {state})"


class RetryController:
    """Runs prompt attempts against an injected line source / prompt writer."""

    def __init__(self, source: LineSource, writer: PromptWriter):
        self.source = source
        self.writer = writer

    async def ask(
        self,
        prompt_text: str,
        options: PromptOptions | None = None,
        *,
        hint: str | None = None,
    ) -> Any:
        request = PromptRequest(
            prompt_text=prompt_text,
            options=options or PromptOptions(),
            hint=hint,
        )
        return await self._run(request)

    async def _run(
        self,
        request: PromptRequest,
        *,
        rejected: ValidationFailure | None = None,
    ) -> Any:
        opts = request.options
        number = 0

        while True:
            if opts.cancel is not None and opts.cancel.is_set():
                log_resolution(request.prompt_text, number, "cancelled")
                raise PromptCancelled(request.prompt_text, number)

            if rejected is not None:
                self._show_rejection(request, rejected)

            number += 1
            attempt = await self._attempt(request, number)

            if attempt.accepted:
                log_resolution(request.prompt_text, number, attempt.outcome)
                return attempt.value

            if attempt.empty:
                rejected = None
                continue

            rejected = attempt.failure
            if opts.retry:
                continue

            rejected.retry = RetrySignal(self, request, rejected)
            log_resolution(request.prompt_text, number, "rejected")
            raise rejected

    async def _attempt(self, request: PromptRequest, number: int) -> Attempt:
        opts = request.options
        attempt = Attempt(number=number)

        self.writer.write(request.prompt_text)
        attempt.raw = await self._read(opts.silent)

        candidate = attempt.raw.strip() if opts.trim else attempt.raw
        attempt.candidate = candidate

        if not candidate:
            if opts.has_default:
                # Defaults are trusted verbatim, never validated.
                attempt.value = opts.default
                attempt.defaulted = True
                attempt.accepted = True
        else:
            try:
                attempt.value = run_validators(opts, candidate)
                attempt.accepted = True
            except ValidationFailure as exc:
                attempt.failure = exc

        log_attempt(
            request.prompt_text,
            number,
            attempt.outcome,
            raw=None if opts.silent else attempt.raw,
            reason=attempt.failure.reason if attempt.failure else None,
        )
        return attempt

    async def _read(self, silent: bool) -> str:
        if not silent:
            return await self.source.read_line()
        self.writer.set_echo(False)
        try:
            return await self.source.read_line()
        finally:
            self.writer.set_echo(True)

    def _show_rejection(self, request: PromptRequest, failure: ValidationFailure):
        if request.hint:
            self.writer.write_line(request.hint)
        if request.options.show_reason and failure.reason:
            self.writer.write_line(failure.reason)


def run_validators(options: PromptOptions, candidate: str) -> Any:
    """Chain the configured validators over a candidate.

    Whatever a validator raises becomes a ValidationFailure carrying the
    message it was raised with; ConfigurationFault is a setup error and passes through.
    """
    value: Any = candidate
    for validator in options.validators:
        try:
            value = validator(value)
        except (ValidationFailure, ConfigurationFault):
            raise
        except Exception as exc:
            raise ValidationFailure(_reason_of(exc)) from exc
    return value


def _reason_of(exc: Exception) -> str:
    # str(KeyError("x")) quotes the key; keep the message as raised.
    if len(exc.args) == 1 and isinstance(exc.args[0], str):
        return exc.args[0]
    return str(exc)
