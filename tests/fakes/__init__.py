"""
Test Fakes Module

Provides fake/stub implementations for testing.
These are minimal implementations that satisfy interfaces without a real bundler.
"""

from tests.fakes.fake_bundler import BundleCall, FakeBundler

__all__ = [
    "BundleCall",
    "FakeBundler",
]
