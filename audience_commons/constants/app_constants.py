class AppConstants:
    RULES = 'rules'

    # rule properties
    FIELD = 'field'
    OPERATOR = 'operator'
    VALUE = 'value'
    CONDITION = 'condition'

    # customer fields with a dedicated value type
    LAST_VISIT = 'last_visit'
    VISITS = 'visits'
    TOTAL_SPENDS = 'total_spends'

    # collections
    CUSTOMERS = 'customers'

    # query keys
    AND_QUERY = '$and'
