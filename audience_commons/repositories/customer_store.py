import logging
from typing import Any, Dict, List, Optional, Protocol

from audience_commons.model.filter_model import CombinedFilter

logger = logging.getLogger(__name__)


class CustomerStore(Protocol):
    """Document store able to count the records matching a combined filter"""

    def count_matching(self, collection_name: str, combined_filter: CombinedFilter) -> int:
        ...


class InMemoryCustomerStore:
    """
    CustomerStore over plain dicts, evaluating filters in process.
    Used for local runs and tests.
    """

    def __init__(self, collections: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.collections = {name: list(documents) for name, documents in (collections or {}).items()}

    def add(self, collection_name: str, document: Dict[str, Any]) -> None:
        self.collections.setdefault(collection_name, []).append(document)

    def count_matching(self, collection_name: str, combined_filter: CombinedFilter) -> int:
        documents = self.collections.get(collection_name, [])
        count = sum(1 for document in documents if combined_filter.matches(document))
        logger.debug(f"{count} of {len(documents)} documents in {collection_name} match {combined_filter.to_query()}")
        return count
