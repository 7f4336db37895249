"""
Conditional form engine.

Given a field schema and a rule map, answers the questions the wizard asks on
every change of the form: which fields are visible, which are required, and
whether the visible required fields are filled in. Every query is a pure
function of ``(schema, rules, data)``; the engine keeps no state after
construction and never modifies the snapshot it is given.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from conditions import (
    ConditionalRule,
    FormConfigurationError,
    RuleKind,
    evaluate,
    normalize_rules,
)
from field_validators import run_validators

__all__ = [
    "ConditionalFormEngine",
    "FieldDescriptor",
    "FieldKind",
    "FormConfigurationError",
    "FormStats",
    "ValidationResult",
    "has_value",
]

Validator = Callable[[Any], Optional[str]]


class FieldKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    SELECT = "select"
    MULTISELECT = "multiselect"


class FieldDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    label: str
    required: bool = False
    kind: FieldKind = FieldKind.TEXT
    placeholder: str = ""
    input_type: str = "text"
    options: Tuple[Tuple[str, str], ...] = ()
    validators: Tuple[Validator, ...] = ()


class ValidationResult(BaseModel):
    is_valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)
    validated_fields: List[str] = Field(default_factory=list)
    skipped_fields: List[str] = Field(default_factory=list)


class FormStats(BaseModel):
    total_fields: int
    visible_fields: int
    required_fields: int
    visible_required_fields: int
    completed_required_fields: int
    skipped_fields: int
    has_errors: bool
    error_count: int


def has_value(value) -> bool:
    """False for missing values, blank strings and empty sequences."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return True


def _load_field(field_id, raw):
    if isinstance(raw, FieldDescriptor):
        descriptor = raw
    else:
        try:
            descriptor = FieldDescriptor.model_validate({"id": field_id, **raw})
        except ValidationError as e:
            raise FormConfigurationError(f"Invalid field '{field_id}': {e}") from e
    if descriptor.id != field_id:
        raise FormConfigurationError(
            f"Field registered as '{field_id}' declares id '{descriptor.id}'"
        )
    return descriptor


class ConditionalFormEngine:
    """Visibility, requiredness and validation for one form schema."""

    def __init__(self, fields: Mapping[str, Any], rules: Optional[Mapping[str, Any]] = None):
        self.fields: Dict[str, FieldDescriptor] = {
            field_id: _load_field(field_id, raw) for field_id, raw in fields.items()
        }
        self.rules: Dict[str, Tuple[ConditionalRule, ...]] = {
            field_id: normalize_rules(raw) for field_id, raw in (rules or {}).items()
        }
        self._check_rules()

    def _check_rules(self):
        for field_id, rules in self.rules.items():
            if field_id not in self.fields:
                raise FormConfigurationError(
                    f"Rules declared for unknown field '{field_id}'"
                )
            for rule in rules:
                if rule.depends_on == field_id:
                    raise FormConfigurationError(
                        f"Field '{field_id}' has a rule that depends on itself"
                    )
                if rule.depends_on not in self.fields:
                    raise FormConfigurationError(
                        f"Rule on '{field_id}' depends on unknown field '{rule.depends_on}'"
                    )

    def _rules_of_kind(self, field_id, kind):
        return [rule for rule in self.rules.get(field_id, ()) if rule.kind is kind]

    # --- BOOLEAN QUERIES ---
    def should_show(self, field_id: str, data: Mapping[str, Any]) -> bool:
        # Every show rule must hold; no show rules means always visible.
        show_rules = self._rules_of_kind(field_id, RuleKind.SHOW)
        return all(evaluate(rule, data) for rule in show_rules)

    def is_required(self, field_id: str, data: Mapping[str, Any]) -> bool:
        descriptor = self.fields.get(field_id)
        base_required = bool(descriptor and descriptor.required)
        if base_required:
            return True
        require_rules = self._rules_of_kind(field_id, RuleKind.REQUIRE)
        return any(evaluate(rule, data) for rule in require_rules)

    # --- FIELD SETS ---
    def get_required_fields(self, data: Mapping[str, Any]) -> List[str]:
        """Fields that would be required if shown, in schema order."""
        return [field_id for field_id in self.fields if self.is_required(field_id, data)]

    def get_visible_fields(self, data: Mapping[str, Any]) -> List[str]:
        return [field_id for field_id in self.fields if self.should_show(field_id, data)]

    def get_visible_required_fields(self, data: Mapping[str, Any]) -> List[str]:
        return [
            field_id
            for field_id in self.get_required_fields(data)
            if self.should_show(field_id, data)
        ]

    def get_visible_configuration(self, data: Mapping[str, Any]) -> Dict[str, FieldDescriptor]:
        return {field_id: self.fields[field_id] for field_id in self.get_visible_fields(data)}

    # --- VALIDATION ---
    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """
        Check every visible required field of the schema.

        Hidden fields are skipped and never produce an error. A visible
        required field fails when its value is missing, blank or an empty
        sequence; a present value is then run through the field's own
        validators. At most one message is kept per field.
        """
        errors: Dict[str, str] = {}
        validated: List[str] = []
        skipped: List[str] = []

        for field_id, descriptor in self.fields.items():
            visible = self.should_show(field_id, data)
            required = self.is_required(field_id, data)

            if required and visible:
                value = data.get(field_id)
                if not has_value(value):
                    errors[field_id] = f"{descriptor.label} es requerido."
                    continue
                message = run_validators(descriptor.validators, value)
                if message:
                    errors[field_id] = message
                else:
                    validated.append(field_id)
            elif not visible:
                skipped.append(field_id)
            else:
                validated.append(field_id)

        # Snapshot keys the schema doesn't know about
        skipped.extend(key for key in data if key not in self.fields)

        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            validated_fields=validated,
            skipped_fields=skipped,
        )

    def is_form_complete(self, data: Mapping[str, Any]) -> bool:
        return self.validate(data).is_valid

    def get_form_stats(self, data: Mapping[str, Any]) -> FormStats:
        result = self.validate(data)
        return FormStats(
            total_fields=len(self.fields),
            visible_fields=len(self.get_visible_fields(data)),
            required_fields=len(self.get_required_fields(data)),
            visible_required_fields=len(self.get_visible_required_fields(data)),
            completed_required_fields=len(result.validated_fields),
            skipped_fields=len(result.skipped_fields),
            has_errors=not result.is_valid,
            error_count=len(result.errors),
        )
