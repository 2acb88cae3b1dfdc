"""
Pytest configuration and shared fixtures for datatransform tests.
"""

import logging

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture
def users_payload() -> dict:
    """API-style response with a nested list of user records."""
    return {
        "meta": {"source": "crm", "page": 1},
        "users": [
            {
                "id": 1,
                "name": "Ann",
                "age": 30,
                "address": {"city": "Oslo", "zip": "0150"},
                "tags": ["admin", "staff"],
            },
            {
                "id": 2,
                "name": "Bob",
                "age": 41,
                "address": {"city": "Bergen"},
                "tags": [],
            },
        ],
    }


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures them."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
