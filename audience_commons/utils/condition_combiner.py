from typing import Callable, Sequence

from audience_commons.constants.app_message import AppMessage
from audience_commons.model.filter_model import CombinedFilter, Condition
from audience_commons.model.rule_model import LogicalCondition
from audience_commons.utils.audience_errors import InvalidInputError

# Any callable with this shape can replace combine_conditions in the
# compiler or the audience service.
ConditionCombiner = Callable[[Sequence[Condition]], CombinedFilter]


def combine_conditions(conditions: Sequence[Condition]) -> CombinedFilter:
    """
    Merge tagged conditions into the filter sent to the customer store.

    - No condition tagged OR: conjunction of every condition, in order.
    - Any condition tagged OR, wherever it sits: the filter is the first
      condition alone and all the others are dropped. Rule sets mixing AND
      and OR therefore do not get boolean precedence.

    Raises:
        InvalidInputError: if there are no conditions.
    """
    if not conditions:
        raise InvalidInputError(AppMessage.NO_CONDITIONS)

    if any(condition.logic == LogicalCondition.OR for condition in conditions):
        return CombinedFilter(conditions=(conditions[0],), conjunction=False)

    return CombinedFilter(conditions=tuple(conditions), conjunction=True)
