import logging
from typing import Any, Dict, Union

from audience_commons.constants.app_constants import AppConstants
from audience_commons.constants.app_message import AppMessage
from audience_commons.model.filter_model import Condition, Predicate, PredicateOp
from audience_commons.model.rule_model import Operator, Rule
from audience_commons.utils.audience_errors import UnsupportedOperatorError
from audience_commons.utils.datetime_utils import end_of_day, start_of_day
from audience_commons.utils.value_coercion import coerce

logger = logging.getLogger(__name__)

OPERATOR_PREDICATES = {
    Operator.GREATER_THAN: PredicateOp.GT,
    Operator.LESS_THAN: PredicateOp.LT,
    Operator.EQUALS: PredicateOp.EQ,
    Operator.NOT_EQUALS: PredicateOp.NE,
    Operator.GREATER_THAN_EQUAL: PredicateOp.GTE,
    Operator.LESS_THAN_EQUAL: PredicateOp.LTE,
}

_OPERATOR_SYMBOLS = tuple(operator.value for operator in Operator)


def to_operator(symbol: Any) -> Operator:
    if symbol not in _OPERATOR_SYMBOLS:
        raise UnsupportedOperatorError(AppMessage.UNSUPPORTED_OPERATOR.format(operator=symbol), operator=symbol)
    return Operator(symbol)


def build_predicate(operator: Operator, value: Any, is_date: bool) -> Predicate:
    """
    Map an operator and its coerced value to a predicate.

    Equality on a date means "on this day": the instant is widened to the
    half-open range [00:00:00.000, 23:59:59.999) UTC of its calendar date.
    Every other operator compares against the value as is.
    """
    if is_date and operator == Operator.EQUALS:
        return Predicate(op=PredicateOp.RANGE, value=start_of_day(value), upper=end_of_day(value))
    return Predicate(op=OPERATOR_PREDICATES[operator], value=value)


def build_condition(rule: Union[Rule, Dict[str, Any]]) -> Condition:
    """
    Build the single-field condition for one rule.

    Raises:
        UnsupportedOperatorError: if the operator is not one of
            >, <, =, !=, >=, <=.
        InvalidInputError: if the value does not fit the field's type.
    """
    if not isinstance(rule, Rule):
        rule = Rule.from_dict(rule)

    operator = to_operator(rule.operator)
    value = coerce(rule.field, rule.value)
    predicate = build_predicate(operator, value, rule.field == AppConstants.LAST_VISIT)

    condition = Condition(field=rule.field, predicate=predicate, logic=rule.condition)
    logger.debug(f"Built condition {condition.to_query()} ({condition.logic.value})")
    return condition
