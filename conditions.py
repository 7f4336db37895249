"""
Conditional rules for intake forms.

A rule ties one field's visibility (``show``) or requiredness (``require``)
to the current value of exactly one other field. Rules are normalized once
when loaded, so evaluation never deals with omitted modes or scalar triggers.
"""

from enum import Enum
from typing import Any, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class FormConfigurationError(ValueError):
    """Raised when a form schema or its rules are authored incorrectly."""


class RuleKind(str, Enum):
    SHOW = "show"
    REQUIRE = "require"


class MatchMode(str, Enum):
    EXACT = "exact"
    CONTAINS = "contains"
    CONTAINS_ALL = "containsAll"


class ConditionalRule(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    depends_on: str = Field(..., alias="dependsOn", min_length=1)
    trigger: Tuple[str, ...] = Field(..., alias="when")
    kind: RuleKind = Field(..., alias="type")
    match_mode: MatchMode = Field(MatchMode.EXACT, alias="matchMode")

    @field_validator("trigger", mode="before")
    @classmethod
    def _trigger_as_tuple(cls, value):
        values = tuple(value) if isinstance(value, (list, tuple)) else (value,)
        if not values:
            raise ValueError("trigger must name at least one value")
        for item in values:
            if not isinstance(item, str):
                raise ValueError(f"trigger values must be strings, got {item!r}")
            if not item:
                raise ValueError("trigger values must not be empty")
        return values


def load_rule(raw):
    """Build a rule from a dict (or pass an existing rule through)."""
    if isinstance(raw, ConditionalRule):
        return raw
    try:
        return ConditionalRule.model_validate(raw)
    except ValidationError as e:
        raise FormConfigurationError(f"Invalid conditional rule {raw!r}: {e}") from e


def normalize_rules(value) -> Tuple[ConditionalRule, ...]:
    """One rule, a list of rules, or None -> tuple of rules."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(load_rule(item) for item in value)
    return (load_rule(value),)


def field_value_as_text(data: Mapping[str, Any], field_id: str) -> str:
    value = data.get(field_id)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def evaluate(rule: ConditionalRule, data: Mapping[str, Any]) -> bool:
    """Return True when ``rule`` holds for the snapshot ``data``."""
    field_value = field_value_as_text(data, rule.depends_on)

    if rule.match_mode is MatchMode.EXACT:
        return field_value in rule.trigger

    lowered = field_value.lower()
    hits = (word.lower() in lowered for word in rule.trigger)
    if rule.match_mode is MatchMode.CONTAINS_ALL:
        return all(hits)
    return any(hits)
