# companies/models/__init__.py

from companies.models.company import Company
from companies.models.sequence import DocumentSequence

__all__ = [
    "Company",
    "DocumentSequence",
]
