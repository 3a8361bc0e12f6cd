from datetime import datetime
from decimal import Decimal
from functools import reduce
from typing import Any

from boto3.dynamodb.conditions import Attr, ConditionBase

from audience_commons.model.filter_model import CombinedFilter, Condition, PredicateOp
from audience_commons.utils.datetime_utils import to_utc_iso


def to_dynamodb_value(value: Any) -> Any:
    """Convert a typed filter value to what boto3 can send to DynamoDB."""
    if isinstance(value, datetime):
        # timestamps are stored as UTC ISO strings, which sort chronologically
        return to_utc_iso(value)
    if isinstance(value, float):
        # boto3 rejects float, numbers go over the wire as Decimal
        return Decimal(str(value))
    return value


def condition_to_dynamodb(condition: Condition) -> ConditionBase:
    attr = Attr(condition.field)
    predicate = condition.predicate
    value = to_dynamodb_value(predicate.value)

    if predicate.op == PredicateOp.GT:
        return attr.gt(value)
    if predicate.op == PredicateOp.LT:
        return attr.lt(value)
    if predicate.op == PredicateOp.GTE:
        return attr.gte(value)
    if predicate.op == PredicateOp.LTE:
        return attr.lte(value)
    if predicate.op == PredicateOp.EQ:
        return attr.eq(value)
    if predicate.op == PredicateOp.NE:
        return attr.ne(value)
    # range: between() is inclusive on both ends, the upper bound must stay open
    return attr.gte(value) & attr.lt(to_dynamodb_value(predicate.upper))


def to_dynamodb_filter(combined: CombinedFilter) -> ConditionBase:
    """
    Build a boto3 FilterExpression from a combined filter.

    Example:
        visits > 5 AND total_spends >= 100
        -> Attr('visits').gt(5) & Attr('total_spends').gte(Decimal('100.0'))
    """
    conditions = combined.conditions if combined.conjunction else combined.conditions[:1]
    return reduce(lambda left, right: left & right, (condition_to_dynamodb(c) for c in conditions))
