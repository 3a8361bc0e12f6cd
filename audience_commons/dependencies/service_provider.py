from audience_commons.dependencies.repositories_provider import get_customer_repository
from audience_commons.services.audience_service import AudienceService

__audience_service = None


def get_audience_service() -> AudienceService:
    """Dependency provider for AudienceService (singleton)"""
    global __audience_service

    if __audience_service is None:
        __audience_service = AudienceService(customer_store=get_customer_repository())

    return __audience_service
