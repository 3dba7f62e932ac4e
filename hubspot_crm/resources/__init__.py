"""CRM object services."""

from .base import ResourceService
from .company import Company, CompanyService, DEFAULT_COMPANY_FIELDS

__all__ = ["ResourceService", "Company", "CompanyService", "DEFAULT_COMPANY_FIELDS"]
