from .base import Base
from .company import Company, TechStack, Specialty, company_tech_stacks, company_specialties
from .request import Request
from .proposal import Proposal

__all__ = [
    'Base',
    'Company',
    'TechStack',
    'Specialty',
    'company_tech_stacks',
    'company_specialties',
    'Request',
    'Proposal',
]
