from collections.abc import Mapping
from typing import Any, List

from pydantic import ValidationError

from audience_commons.constants.app_constants import AppConstants
from audience_commons.constants.app_message import AppMessage
from audience_commons.model.rule_model import LogicalCondition, Rule
from audience_commons.utils.audience_errors import InvalidInputError

_CONDITIONS = tuple(condition.value for condition in LogicalCondition)


def validate_rules(rules: Any) -> None:
    """
    Check the structure of a raw rule sequence.

    `field`, `operator` and `condition` must be present and non-empty.
    `value` only has to be present: 0, "", False and None are valid values.

    Raises:
        InvalidInputError: if `rules` is not a list, or naming the index of
            the first rule with missing properties.
    """
    if not isinstance(rules, (list, tuple)):
        raise InvalidInputError(AppMessage.RULES_NOT_A_LIST)

    for index, rule in enumerate(rules):
        if (not isinstance(rule, Mapping)
                or not rule.get(AppConstants.FIELD)
                or not rule.get(AppConstants.OPERATOR)
                or AppConstants.VALUE not in rule
                or not rule.get(AppConstants.CONDITION)):
            raise InvalidInputError(AppMessage.RULE_MISSING_PROPERTIES.format(index=index), index=index)


def parse_rules(rules: Any) -> List[Rule]:
    """Validate raw rule records and turn them into typed rules."""
    validate_rules(rules)

    parsed: List[Rule] = []
    for index, rule in enumerate(rules):
        condition = rule[AppConstants.CONDITION]
        if condition not in _CONDITIONS:
            raise InvalidInputError(
                AppMessage.RULE_INVALID_CONDITION.format(index=index, condition=condition),
                index=index,
            )
        try:
            parsed.append(Rule.from_dict(rule))
        except ValidationError as e:
            raise InvalidInputError(
                AppMessage.RULE_INVALID_PROPERTIES.format(index=index), index=index
            ) from e
    return parsed
