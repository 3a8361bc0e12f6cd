from audience_commons.dependencies.aws_providers import get_dynamodb_resource
from audience_commons.repositories.customer_repository import CustomerRepository

# Create singleton instances
__customer_repository = None


def get_customer_repository() -> CustomerRepository:
    global __customer_repository
    if __customer_repository is None:
        __customer_repository = CustomerRepository(resource=get_dynamodb_resource())
    return __customer_repository
