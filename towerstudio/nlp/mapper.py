"""IntentMapper — free-text instructions to partial configuration updates.

Usage::

    from towerstudio.nlp import IntentMapper

    mapper = IntentMapper()
    inference = mapper.infer("a slender 30 storey tower with a podium", config)
    inference.overlay      # ConfigOverlay with only the changed fields
    inference.summary      # "Set tower to 30 floors. Slenderized ..."

Matching is plain substring and regex inspection of the lower-cased,
trimmed text against a fixed, ordered rule table.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import BaseModel, Field

from towerstudio.models.building import BuildingConfig
from towerstudio.models.overlay import ConfigOverlay
from towerstudio.nlp.rules import DEFAULT_RULES, IntentRule

logger = logging.getLogger(__name__)


class Inference(BaseModel):
    """Result of mapping one instruction."""

    overlay: ConfigOverlay = Field(default_factory=ConfigOverlay)
    summary: str = ""
    """Summaries of every fired rule, in rule order, space-separated."""

    fired: list[str] = Field(default_factory=list)
    """Names of the rules that fired."""

    def is_empty(self) -> bool:
        return self.overlay.is_empty()


def normalize(text: str) -> str:
    return text.strip().lower()


class IntentMapper:
    """Evaluate every rule once, in order, and collect their updates.

    Parameters
    ----------
    rules:
        Ordered rule table.  Defaults to :data:`DEFAULT_RULES`.
    """

    def __init__(self, rules: Iterable[IntentRule] | None = None) -> None:
        self.rules: tuple[IntentRule, ...] = tuple(rules) if rules is not None else DEFAULT_RULES

    def infer(self, text: str, current: BuildingConfig) -> Inference:
        """Map *text* onto an overlay relative to *current*.

        Empty or whitespace-only text yields an empty inference.
        """
        normalized = normalize(text)
        if not normalized:
            return Inference()

        updates: dict[str, Any] = {}
        colors: dict[str, str] = {}
        summaries: list[str] = []
        fired: list[str] = []

        for rule in self.rules:
            effect = rule(normalized, current)
            if effect is None:
                continue
            fired.append(rule.name)
            rule_updates = dict(effect.updates)
            colors.update(rule_updates.pop("colors", {}))
            updates.update(rule_updates)
            if effect.summary:
                summaries.append(effect.summary)
            logger.debug("Intent rule %s fired: %s", rule.name, effect.updates)

        if colors:
            updates["colors"] = colors

        return Inference(
            overlay=ConfigOverlay.model_validate(updates),
            summary=" ".join(summaries),
            fired=fired,
        )


def infer_intent(text: str, current: BuildingConfig) -> Inference:
    """Map *text* with the default rule table."""
    return IntentMapper().infer(text, current)
