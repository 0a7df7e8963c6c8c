"""
Filter DSL
==========
Declarative predicates that narrow which memos a chat, search or generate
call considers.

Filters are never evaluated here. They are validated at the tool boundary
and forwarded to the Skald API unchanged; a list of filters is AND-ed by the
backend.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from skald_mcp.core.exceptions import FilterValidationError


class FilterOperator(str, Enum):
    EQ = "eq"
    NEQ = "neq"
    CONTAINS = "contains"
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"
    IN = "in"
    NOT_IN = "not_in"


class FilterType(str, Enum):
    """Whether ``field`` names a built-in memo attribute or a custom metadata key."""
    NATIVE_FIELD = "native_field"
    CUSTOM_METADATA = "custom_metadata"


SEQUENCE_OPERATORS = frozenset({FilterOperator.IN, FilterOperator.NOT_IN})


@dataclass(frozen=True)
class ScalarValue:
    value: str


@dataclass(frozen=True)
class SequenceValue:
    values: tuple[str, ...]


FilterValue = Union[ScalarValue, SequenceValue]


class Filter(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field: str = Field(..., min_length=1, description="The field to filter on")
    operator: FilterOperator = Field(..., description="The filter operator")
    value: Union[str, List[str]] = Field(..., description="The value to filter by")
    filter_type: FilterType = Field(
        ...,
        description="Filter type: native_field (e.g., source, tags) or custom_metadata",
    )

    @model_validator(mode="after")
    def check_value_matches_operator(self) -> "Filter":
        is_sequence = isinstance(self.value, list)
        if self.operator in SEQUENCE_OPERATORS and not is_sequence:
            raise FilterValidationError(
                field="value",
                reason=f"operator '{self.operator.value}' requires a list of strings",
                value=self.value,
            )
        if self.operator not in SEQUENCE_OPERATORS and is_sequence:
            raise FilterValidationError(
                field="value",
                reason=f"operator '{self.operator.value}' requires a single string",
                value=self.value,
            )
        return self

    @property
    def tagged_value(self) -> FilterValue:
        if self.operator in SEQUENCE_OPERATORS:
            return SequenceValue(tuple(self.value))
        return ScalarValue(self.value)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


_FILTER_LIST = TypeAdapter(List[Filter])


def parse_filters(raw: Optional[Iterable[Any]]) -> Optional[list[Filter]]:
    """
    Validate caller-supplied filter data.

    ``None`` means no narrowing and is returned as-is. Items may be Filter
    instances or plain mappings.

    Raises:
        pydantic.ValidationError: If any filter is malformed.
    """
    if raw is None:
        return None
    return _FILTER_LIST.validate_python(list(raw))


def filters_payload(filters: Sequence[Filter]) -> list[dict[str, Any]]:
    """Serialize filters for the request body, preserving order."""
    return [f.to_payload() for f in filters]


__all__ = [
    "Filter",
    "FilterOperator",
    "FilterType",
    "FilterValue",
    "ScalarValue",
    "SequenceValue",
    "SEQUENCE_OPERATORS",
    "parse_filters",
    "filters_payload",
]
