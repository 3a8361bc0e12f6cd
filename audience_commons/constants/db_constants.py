class DBConstants:

    # environment keys
    AWS_REGION = 'AWS_REGION'
    AWS_DYNAMODB_ACCESS_KEY_ID = 'AWS_DYNAMODB_ACCESS_KEY_ID'
    AWS_DYNAMODB_SECRET_ACCESS_KEY = 'AWS_DYNAMODB_SECRET_ACCESS_KEY'
    TABLE_CUSTOMERS = 'DYNAMODB_TABLE_CUSTOMERS'

    DEFAULT_REGION = 'ap-south-1'
    DEFAULT_CUSTOMERS_TABLE = 'customers'

    # scan
    SELECT_COUNT = 'COUNT'
    COUNT = 'Count'
    LAST_EVAL_KEY = 'LastEvaluatedKey'
