import logging
import os
from typing import Any, Dict

from audience_commons.constants.app_constants import AppConstants
from audience_commons.constants.db_constants import DBConstants
from audience_commons.model.filter_model import CombinedFilter
from audience_commons.utils.dynamo_filter_translator import to_dynamodb_filter, to_dynamodb_value

logger = logging.getLogger(__name__)


class CustomerRepository:
    """
    DynamoDB-backed customer store.

    The `customers` collection maps to the table named by
    DYNAMODB_TABLE_CUSTOMERS; any other collection name is used as the
    table name directly.
    """

    def __init__(self, resource):
        self.resource = resource
        self.table_name = os.getenv(DBConstants.TABLE_CUSTOMERS, DBConstants.DEFAULT_CUSTOMERS_TABLE)
        self.table = self.resource.Table(self.table_name)
        logger.info(f"Initialized CustomerRepository with table: {self.table_name}")

    def _get_table(self, collection_name: str):
        if collection_name == AppConstants.CUSTOMERS:
            return self.table
        return self.resource.Table(collection_name)

    def count_matching(self, collection_name: str, combined_filter: CombinedFilter) -> int:
        """
        Count the items of a collection matching the filter.

        Scans with Select=COUNT so no items are transferred, following
        LastEvaluatedKey until the whole table has been read.

        Args:
            collection_name: logical collection, e.g. "customers"
            combined_filter: filter built by the audience filter compiler

        Returns:
            int: number of matching items
        """
        table = self._get_table(collection_name)
        scan_kwargs = {
            'Select': DBConstants.SELECT_COUNT,
            'FilterExpression': to_dynamodb_filter(combined_filter),
        }

        total = 0
        try:
            while True:
                response = table.scan(**scan_kwargs)
                total += response.get(DBConstants.COUNT, 0)
                last_key = response.get(DBConstants.LAST_EVAL_KEY)
                if not last_key:
                    break
                scan_kwargs['ExclusiveStartKey'] = last_key
        except Exception as e:
            logger.error(f"Error counting items in {collection_name}: {str(e)}")
            logger.error(f"Filter: {combined_filter.to_query()}")
            raise

        logger.info(f"Counted {total} matching items in {collection_name}")
        return total

    def add_customer(self, item: Dict[str, Any]) -> None:
        """Add a customer to the table, converting floats and datetimes for DynamoDB."""
        try:
            self.table.put_item(Item={key: to_dynamodb_value(value) for key, value in item.items()})
            logger.info(f"Customer added to table {self.table_name}.")
        except Exception as e:
            logger.error(f"Failed to add customer: {str(e)}")
            raise
