"""StudioSession, the single in-memory configuration slot.

A session starts from the default config and changes only through
direct field edits, applied instructions, and resets.  Each change
replaces the held config with a new value.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from towerstudio.compiler.script import ScriptCompiler
from towerstudio.config import (
    STATUS_APPLIED,
    STATUS_NO_MOVES,
    STATUS_RESET,
    SUMMARY_HISTORY_LIMIT,
)
from towerstudio.models.building import (
    COLOR_KEYS,
    FIELD_RANGES,
    BuildingConfig,
    ConfigurationError,
    coerce_number,
    default_config,
)
from towerstudio.models.overlay import ConfigOverlay, apply_overlay
from towerstudio.nlp.mapper import Inference, IntentMapper
from towerstudio.studio.sinks import ScriptSink, SinkResult

logger = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"1", "true", "yes", "on", "y"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", "n"})


def _parse_bool(field: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigurationError(f"Expected a boolean for {field}, got {value!r}")


def edit_overlay(field: str, value: Any) -> ConfigOverlay:
    """Build the overlay for a single form-style edit.

    Numeric text is coerced (invalid text becomes the field minimum),
    ``colors.<key>`` addresses one palette entry, and unknown fields or
    invalid choices raise :class:`ConfigurationError`.
    """
    if field.startswith("colors."):
        key = field.split(".", 1)[1]
        if key not in COLOR_KEYS:
            raise ConfigurationError(f"Unknown colour: {key}")
        data: dict[str, Any] = {"colors": {key: value}}
    elif field in FIELD_RANGES:
        data = {field: coerce_number(field, value)}
    elif field not in BuildingConfig.model_fields or field == "colors":
        raise ConfigurationError(f"Unknown field: {field}")
    elif BuildingConfig.model_fields[field].annotation is bool:
        data = {field: _parse_bool(field, value)}
    else:
        data = {field: value}

    try:
        return ConfigOverlay.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid value for {field}: {value!r}") from e


class StudioSession:
    """Holds the current config and the derived script.

    Parameters
    ----------
    config:
        Starting config; defaults to :func:`default_config`.
    mapper:
        Intent mapper for :meth:`apply_prompt`.
    """

    def __init__(
        self,
        config: BuildingConfig | None = None,
        mapper: IntentMapper | None = None,
    ) -> None:
        self._config = config if config is not None else default_config()
        self._mapper = mapper or IntentMapper()
        self._compiler = ScriptCompiler()
        self.history: list[str] = []
        self.status: str | None = None

    @property
    def config(self) -> BuildingConfig:
        return self._config

    @property
    def script(self) -> str:
        return self._compiler.compile(self._config)

    def update(self, overlay: ConfigOverlay | dict[str, Any]) -> BuildingConfig:
        """Merge *overlay* into the held config."""
        try:
            self._config = apply_overlay(self._config, overlay)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e
        return self._config

    def edit(self, field: str, value: Any) -> BuildingConfig:
        """Apply one direct field edit, e.g. ``edit("floors", "24")``."""
        return self.update(edit_overlay(field, value))

    def apply_prompt(self, prompt: str) -> Inference:
        """Run *prompt* through the intent mapper and merge the result.

        When nothing fires, the config is left untouched and the status
        reports that no design moves were found.
        """
        inference = self._mapper.infer(prompt, self._config)
        if inference.is_empty():
            self.status = STATUS_NO_MOVES
            return inference

        changes = inference.overlay.changes()
        changes["narrative"] = f"{self._config.narrative}\n\nPrompt: {prompt.strip()}"
        self.update(changes)

        if inference.summary:
            self.history = [inference.summary, *self.history][:SUMMARY_HISTORY_LIMIT]
        self.status = STATUS_APPLIED
        logger.debug("Applied prompt via rules: %s", ", ".join(inference.fired))
        return inference

    def reset(self) -> BuildingConfig:
        self._config = default_config()
        self.history = []
        self.status = STATUS_RESET
        return self._config

    def deliver(self, sink: ScriptSink) -> SinkResult:
        """Send the current script to *sink*; failures only set the status."""
        result = sink.deliver(self.script, self._config)
        self.status = result.message
        return result
