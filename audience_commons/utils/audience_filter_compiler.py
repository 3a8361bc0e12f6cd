import json
import logging
from typing import Any, Dict, List, Sequence, Union

from audience_commons.model.filter_model import CombinedFilter, Condition
from audience_commons.model.rule_model import Rule
from audience_commons.utils.audience_errors import InvalidInputError
from audience_commons.utils.condition_builder import build_condition
from audience_commons.utils.condition_combiner import ConditionCombiner, combine_conditions
from audience_commons.utils.rule_validator import parse_rules

"""
================================================================================
Audience Filter Compiler – Usage Guide
================================================================================
Purpose:
    Compiles the rule list of an audience (segment) into a CombinedFilter that
    the customer store can count. It:
      - validates the shape of every rule before interpreting any of them,
      - coerces values to the field type (last_visit, visits, total_spends),
      - turns `last_visit = <date>` into an "on this day" range,
      - combines the per-rule conditions with the configured combiner.

-------------------------------------------------------------------------------
1. BASIC USAGE
-------------------------------------------------------------------------------
    from audience_commons.utils.audience_filter_compiler import AudienceFilterCompiler

    compiler = AudienceFilterCompiler()

    rules = [
        {"field": "visits", "operator": ">", "value": 5, "condition": "AND"},
        {"field": "total_spends", "operator": ">=", "value": "100", "condition": "AND"},
    ]
    combined = compiler.compile(rules)
    print(combined.to_query())
    # Output: {'$and': [{'visits': {'$gt': 5}}, {'total_spends': {'$gte': 100.0}}]}

-------------------------------------------------------------------------------
2. DATES
-------------------------------------------------------------------------------
    rules = [{"field": "last_visit", "operator": "=", "value": "2024-03-15", "condition": "AND"}]
    print(compiler.compile(rules).to_query())
    # Output: {'$and': [{'last_visit': {'$gte': 2024-03-15 00:00:00+00:00,
    #                                   '$lt': 2024-03-15 23:59:59.999000+00:00}}]}

-------------------------------------------------------------------------------
3. OR RULES
-------------------------------------------------------------------------------
    A single OR anywhere in the list makes the filter the FIRST rule only:

    rules = [
        {"field": "visits", "operator": ">", "value": 5, "condition": "AND"},
        {"field": "city", "operator": "=", "value": "Chennai", "condition": "OR"},
    ]
    print(compiler.compile(rules).to_query())
    # Output: {'visits': {'$gt': 5}}

    Pass another combiner to change that:
        AudienceFilterCompiler(combiner=my_combiner)

-------------------------------------------------------------------------------
4. ERRORS
-------------------------------------------------------------------------------
    InvalidInputError        → rules not a list, rule missing properties,
                               bad number/date, empty rule list
    UnsupportedOperatorError → operator outside >, <, =, !=, >=, <=
================================================================================
"""

logger = logging.getLogger(__name__)


class AudienceFilterCompiler:
    """
    Compile audience rules into a filter for the customer store.
    """

    def __init__(self, combiner: ConditionCombiner = combine_conditions):
        self.combiner = combiner

    def parse(self, rules: Any) -> List[Rule]:
        return parse_rules(rules)

    def build_conditions(self, rules: Sequence[Rule]) -> List[Condition]:
        return [build_condition(rule) for rule in rules]

    def combine(self, conditions: Sequence[Condition]) -> CombinedFilter:
        return self.combiner(conditions)

    def compile(self, rules: Union[str, List[Dict[str, Any]]]) -> CombinedFilter:
        """
        Top-level compile function.
        rules can be a list of rule dicts or its JSON string
        """
        if isinstance(rules, str):
            try:
                rules = json.loads(rules)
            except json.JSONDecodeError as e:
                raise InvalidInputError(f"Rules JSON parse error: {e}") from e

        combined = self.combine(self.build_conditions(self.parse(rules)))
        logger.debug(f"Compiled {len(combined.conditions)} condition(s): {combined.to_query()}")
        return combined
