class AppMessage:
    RULES_NOT_A_LIST = "Rules must be an array."
    RULE_MISSING_PROPERTIES = "Rule at index {index} is missing required properties."
    RULE_INVALID_PROPERTIES = "Rule at index {index} has invalid properties."
    RULE_INVALID_CONDITION = "Rule at index {index} has an invalid condition '{condition}'."
    REQUEST_NOT_A_MAPPING = "Request body must be an object."
    NO_CONDITIONS = "No conditions to combine."
    UNSUPPORTED_OPERATOR = "Unsupported operator '{operator}'."
    INVALID_DATE = "Value {value!r} is not a valid date for field '{field}'."
    INVALID_INTEGER = "Value {value!r} is not a valid integer for field '{field}'."
    INVALID_FLOAT = "Value {value!r} is not a valid number for field '{field}'."
    AUDIENCE_QUERY_FAILED = "Failed to calculate audience size."
