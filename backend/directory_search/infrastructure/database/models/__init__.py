from .directory_models import OrganizationModel, ServiceModel, CaseStudyModel

__all__ = [
    "OrganizationModel",
    "ServiceModel",
    "CaseStudyModel",
]
