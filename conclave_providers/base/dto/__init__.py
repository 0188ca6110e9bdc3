"""DTO validation package for providers."""

from .provider_config import ProviderConfig, parse_duration

__all__ = ["ProviderConfig", "parse_duration"]
