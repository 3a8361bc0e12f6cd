import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from audience_commons.constants.app_constants import AppConstants
from audience_commons.constants.app_message import AppMessage
from audience_commons.model.audience_model import AudienceSizeRequest, AudienceSizeResponse, ErrorResponse
from audience_commons.repositories.customer_store import CustomerStore
from audience_commons.utils.audience_errors import AudienceError, InvalidInputError, QueryExecutionFailedError
from audience_commons.utils.audience_filter_compiler import AudienceFilterCompiler

logger = logging.getLogger(__name__)


class AudienceService:
    def __init__(self, customer_store: CustomerStore, compiler: Optional[AudienceFilterCompiler] = None):
        self.customer_store = customer_store
        self.compiler = compiler or AudienceFilterCompiler()
        logger.info("Initialized AudienceService")

    def get_audience_size(self, rules: Any) -> int:
        """
        Count the customers matching the audience rules.

        The rules are compiled completely before the store is queried, so
        a bad rule never results in a partial query.

        Raises:
            InvalidInputError: malformed rules or values, empty rule list
            UnsupportedOperatorError: operator outside the supported set
            QueryExecutionFailedError: the customer store failed
        """
        combined_filter = self.compiler.compile(rules)

        try:
            return self.customer_store.count_matching(AppConstants.CUSTOMERS, combined_filter)
        except Exception as e:
            logger.error(f"Error querying audience size: {str(e)}", exc_info=True)
            raise QueryExecutionFailedError(AppMessage.AUDIENCE_QUERY_FAILED) from e

    def get_audience_size_response(self, body: Any) -> Dict[str, Any]:
        """
        Handle an audience size request body ({"rules": [...]}).

        Returns:
            {"size": <count>} on success, {"error": <message>} on failure.
            The transport layer answers errors with a server-error status.
        """
        try:
            size = self.get_audience_size(self._parse_request(body).rules)
            return AudienceSizeResponse(size=size).model_dump()
        except AudienceError as e:
            logger.warning(f"Audience size request failed: {e.message}")
            return ErrorResponse(error=e.message).model_dump()

    @staticmethod
    def _parse_request(body: Any) -> AudienceSizeRequest:
        try:
            return AudienceSizeRequest.model_validate(body)
        except ValidationError as e:
            raise InvalidInputError(AppMessage.REQUEST_NOT_A_MAPPING) from e
