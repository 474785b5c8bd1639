from .base import Base
from .session import engine, async_session_factory, create_session_factory, get_async_url
from .models import OrganizationModel, ServiceModel, CaseStudyModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "create_session_factory",
    "get_async_url",
    "OrganizationModel",
    "ServiceModel",
    "CaseStudyModel",
]
