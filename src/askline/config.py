"""Configuration management for askline.

Holds the defaults applied to every prompt a Prompter issues, plus the
logging settings. Loaded through CascadingConfig, see askline.cascade for
the layer order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from askline.cascade import CascadingConfig, parse_bool
from askline.log import setup_logging
from askline.models import PromptOptions


@dataclass
class Config:
    """Global prompt defaults."""

    trim: bool = True
    retry: bool = True
    show_reason: bool = False
    log_level: str | None = None
    log_dir: Path | None = None

    # ── Loading ──────────────────────────────────────────────

    @classmethod
    def load(
        cls,
        workspace: Path | None = None,
        *,
        home: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> Config:
        """Load config: env > <workspace>/.askline.toml > ~/.askline/config.toml."""
        cascade = CascadingConfig(
            workspace=workspace or Path.cwd(),
            home=home,
            environ=environ,
        )
        return cls.from_cascade(cascade)

    @classmethod
    def from_cascade(cls, cascade: CascadingConfig) -> Config:
        cfg = cls()
        for key in ("trim", "retry", "show_reason"):
            value = cascade.get(key)
            if value is None:
                continue
            parsed = parse_bool(value)
            if parsed is None:
                logging.getLogger(__name__).warning(
                    "Ignoring config %s=%r from %s: not a boolean",
                    key, value, ", ".join(cascade.get_sources(key)),
                )
                continue
            setattr(cfg, key, parsed)

        if log_level := cascade.get("log_level"):
            cfg.log_level = str(log_level).upper()
        if log_dir := cascade.get("log_dir"):
            cfg.log_dir = Path(log_dir).expanduser()
        return cfg

    # ── Accessors ────────────────────────────────────────────

    def prompt_options(self, **overrides: Any) -> PromptOptions:
        """Build PromptOptions from these defaults.

        A None override of trim/retry/show_reason keeps the configured value.
        """
        values: dict[str, Any] = {
            "trim": self.trim,
            "retry": self.retry,
            "show_reason": self.show_reason,
        }
        values.update({
            k: v for k, v in overrides.items()
            if not (v is None and k in values)
        })
        return PromptOptions(**values)

    @property
    def logging_requested(self) -> bool:
        """True when a log_dir or log_level was configured."""
        return self.log_dir is not None or self.log_level is not None

    def setup_logging(self) -> logging.Logger:
        return setup_logging(self.log_dir, self.log_level)
