from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from audience_commons.constants.app_constants import AppConstants
from audience_commons.model.rule_model import LogicalCondition
from audience_commons.utils.datetime_utils import parse_instant


class PredicateOp(str, Enum):
    """Field-scoped comparisons understood by the customer store"""
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"
    EQ = "eq"
    NE = "ne"
    RANGE = "range"  # half-open [value, upper)


# document-store spelling of each comparison
QUERY_OPERATORS = {
    PredicateOp.GT: '$gt',
    PredicateOp.LT: '$lt',
    PredicateOp.GTE: '$gte',
    PredicateOp.LTE: '$lte',
    PredicateOp.NE: '$ne',
}


class Predicate(BaseModel):
    model_config = ConfigDict(frozen=True)

    op: PredicateOp
    value: Any
    upper: Optional[Any] = None

    def to_query(self) -> Any:
        """
        Render as a document-store query fragment:
            gt    -> {"$gt": value}
            eq    -> value
            range -> {"$gte": value, "$lt": upper}
        """
        if self.op == PredicateOp.EQ:
            return self.value
        if self.op == PredicateOp.RANGE:
            return {'$gte': self.value, '$lt': self.upper}
        return {QUERY_OPERATORS[self.op]: self.value}

    def matches(self, candidate: Any) -> bool:
        """Evaluate the predicate against a stored value."""
        if candidate is None:
            # a missing attribute only equals null
            if self.op == PredicateOp.EQ:
                return self.value is None
            return self.op == PredicateOp.NE and self.value is not None
        candidate = self._comparable(candidate)
        try:
            if self.op == PredicateOp.GT:
                return candidate > self.value
            if self.op == PredicateOp.LT:
                return candidate < self.value
            if self.op == PredicateOp.GTE:
                return candidate >= self.value
            if self.op == PredicateOp.LTE:
                return candidate <= self.value
            if self.op == PredicateOp.EQ:
                return candidate == self.value
            if self.op == PredicateOp.NE:
                return candidate != self.value
            return self.value <= candidate < self.upper
        except TypeError:
            # values of different types never compare as matching
            return False

    def _comparable(self, candidate: Any) -> Any:
        if isinstance(self.value, datetime):
            try:
                return parse_instant(candidate)
            except ValueError:
                return candidate
        return candidate


class Condition(BaseModel):
    """A single-field filter tagged with the logical connective of its rule"""
    model_config = ConfigDict(frozen=True)

    field: str
    predicate: Predicate
    logic: LogicalCondition

    def to_query(self) -> Dict[str, Any]:
        return {self.field: self.predicate.to_query()}

    def matches(self, document: Mapping[str, Any]) -> bool:
        return self.predicate.matches(document.get(self.field))


class CombinedFilter(BaseModel):
    """
    The filter handed to the customer store.

    Either a conjunction of every condition, or (conjunction=False) exactly
    one condition applied on its own.
    """
    model_config = ConfigDict(frozen=True)

    conditions: Tuple[Condition, ...]
    conjunction: bool = True

    def to_query(self) -> Dict[str, Any]:
        if not self.conjunction:
            return self.conditions[0].to_query()
        return {AppConstants.AND_QUERY: [condition.to_query() for condition in self.conditions]}

    def matches(self, document: Mapping[str, Any]) -> bool:
        conditions = self.conditions if self.conjunction else self.conditions[:1]
        return all(condition.matches(document) for condition in conditions)
