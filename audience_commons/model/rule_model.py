from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from audience_commons.constants.app_constants import AppConstants


class Operator(str, Enum):
    """Comparison operators a rule may use"""
    GREATER_THAN = ">"
    LESS_THAN = "<"
    EQUALS = "="
    NOT_EQUALS = "!="
    GREATER_THAN_EQUAL = ">="
    LESS_THAN_EQUAL = "<="


class LogicalCondition(str, Enum):
    """How a rule combines with the rest of the rule sequence"""
    AND = "AND"
    OR = "OR"


class Rule(BaseModel):
    """
    One user-specified filter predicate.

    `operator` stays the raw value, whatever its type, so an unknown
    operator reaches the condition builder, which is where it gets rejected.
    """
    model_config = ConfigDict(frozen=True)

    field: str
    operator: Any
    value: Any
    condition: LogicalCondition

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> 'Rule':
        return cls(
            field=item[AppConstants.FIELD],
            operator=item[AppConstants.OPERATOR],
            value=item[AppConstants.VALUE],
            condition=item[AppConstants.CONDITION],
        )
