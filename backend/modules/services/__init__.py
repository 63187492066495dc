"""
Service provider module.

Provider registration, the public provider directory, and profile and
portfolio management for providers.

Public API:
- IProviderRepository: Storage interface for provider profiles
- ServiceProviderProfile, PublicProvider, PortfolioItem: Models
- ProviderNotFoundError, ProviderProfileMissingError: Exceptions
"""

from .interfaces import IProviderRepository
from .models import PortfolioItem, PublicProvider, ServiceProviderProfile
from .exceptions import ProviderNotFoundError, ProviderProfileMissingError

__all__ = [
    "IProviderRepository",
    "PortfolioItem",
    "PublicProvider",
    "ServiceProviderProfile",
    "ProviderNotFoundError",
    "ProviderProfileMissingError",
]
