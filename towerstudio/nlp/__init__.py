"""Intent Mapper — keyword/regex rules turning instructions into overlays."""

from towerstudio.nlp.mapper import Inference, IntentMapper, infer_intent
from towerstudio.nlp.rules import DEFAULT_RULES, IntentRule, RuleEffect

__all__ = ["DEFAULT_RULES", "Inference", "IntentMapper", "IntentRule", "RuleEffect", "infer_intent"]
