"""Scoring scheme data models.

A scheme is the data that distinguishes one matching context from another
(roommate vs. peer networking): which fields are compared, how, and with what
weight. The engine itself has no per-context code.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from campus_match.exceptions import SchemeConfigurationError


class FieldKind(str, Enum):
    """How a field's self and candidate values are compared."""

    CATEGORICAL = "categorical"
    NUMERIC_RANGE = "numeric_range"
    BOOLEAN_PREFERENCE = "boolean_preference"
    CLOSENESS = "closeness"
    SET = "set"


class FieldDefinition(BaseModel):
    """One comparable attribute in a scoring scheme."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Field name, also used as the priority key")
    kind: FieldKind
    weight: float = Field(ge=0, description="Base weight before priority boost")

    # Where the value lives on a profile
    attribute: str | None = Field(
        default=None,
        description="Profile key holding the value (defaults to the field name)",
    )
    aliases: tuple[str, ...] = Field(
        default=(),
        description="Fallback profile keys tried after the attribute",
    )

    # numeric_range options
    min_attribute: str | None = None
    max_attribute: str | None = None
    range_multiplier: float = Field(default=1.0, ge=0)

    # boolean_preference options
    preference_attribute: str | None = Field(
        default=None,
        description="Self-profile key of the 'prefers same' flag",
    )
    penalty: float = Field(
        default=5.0,
        ge=0,
        description="Fixed deduction on a mismatch; never boosted by priority",
    )

    @model_validator(mode="after")
    def check_kind_options(self) -> "FieldDefinition":
        """Reject options that do not apply to the field's kind."""
        is_preference = self.kind is FieldKind.BOOLEAN_PREFERENCE
        if is_preference and not self.preference_attribute:
            raise ValueError(f"Field '{self.name}' needs a preference_attribute")
        if not is_preference and self.preference_attribute:
            raise ValueError(
                f"Field '{self.name}' is {self.kind.value}; preference_attribute is not allowed"
            )

        if (self.min_attribute is None) != (self.max_attribute is None):
            raise ValueError(f"Field '{self.name}' needs both min_attribute and max_attribute")
        if self.min_attribute and self.kind is not FieldKind.NUMERIC_RANGE:
            raise ValueError(f"Field '{self.name}' is not a numeric_range field")
        return self

    @property
    def lookup_keys(self) -> tuple[str, ...]:
        """Profile keys to read, in order of preference."""
        return (self.attribute or self.name, *self.aliases)


class ScoringScheme(BaseModel):
    """A named set of field definitions plus ranking policy."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    definitions: tuple[FieldDefinition, ...]

    # Inclusion policy: keep scores above the threshold (or equal to it when
    # include_threshold is set)
    inclusion_threshold: float = 0.0
    include_threshold: bool = False

    default_limit: int | None = Field(default=None, ge=0)
    case_sensitive: bool = False

    # Profile keys searched by free-text search; empty means every text value
    search_attributes: tuple[str, ...] = ()

    @field_validator("definitions")
    @classmethod
    def check_unique_names(
        cls, v: tuple[FieldDefinition, ...]
    ) -> tuple[FieldDefinition, ...]:
        """Field names must be unique and the scheme non-empty."""
        if not v:
            raise ValueError("A scoring scheme needs at least one field")
        seen: set[str] = set()
        for definition in v:
            if definition.name in seen:
                raise ValueError(f"Duplicate field name: {definition.name}")
            seen.add(definition.name)
        return v

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(d.name for d in self.definitions)

    def get_field(self, name: str) -> FieldDefinition:
        """Look up a field definition by name.

        Raises:
            SchemeConfigurationError: If the scheme has no such field.
        """
        for definition in self.definitions:
            if definition.name == name:
                return definition
        raise SchemeConfigurationError(
            f"Scheme '{self.name}' has no field '{name}' "
            f"(available: {', '.join(self.field_names)})"
        )

    def passes_threshold(self, score: float) -> bool:
        """Check a score against the scheme's inclusion threshold."""
        if self.include_threshold:
            return score >= self.inclusion_threshold
        return score > self.inclusion_threshold
