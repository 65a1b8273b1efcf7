"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .provider_factory import ProviderTestFactory, StubProvider
from .provider_server import FakeProviderServer, Reply

__all__ = ["FakeProviderServer", "ProviderTestFactory", "Reply", "StubProvider"]
