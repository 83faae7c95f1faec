"""Pytest configuration and fixtures for deep research tests."""

import pytest

from mcp_server_deep_research.research.generation import Generator

from .fakes import FakeChatModel


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: End-to-end tests requiring real API keys")
    config.addinivalue_line("markers", "slow: Tests that take longer to run")


@pytest.fixture
def fake_llm() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture
def generator(fake_llm: FakeChatModel) -> Generator:
    return Generator(fake_llm)
