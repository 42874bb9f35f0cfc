"""Pytest configuration and shared fixtures"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from src.common.config import DEFAULT_UNIT_TABLES_PATH
from src.criteria import UnitTables, build_registry
from src.main import app

FIXED_NOW = datetime(2024, 3, 10, 12, 0, 0)


@pytest.fixture
def unit_tables():
    """Load the bundled unit tables"""
    return UnitTables(DEFAULT_UNIT_TABLES_PATH)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def registry(unit_tables):
    """Registry whose relative dates are anchored at FIXED_NOW"""
    return build_registry(unit_tables, clock=lambda: FIXED_NOW)


@pytest.fixture(scope="function")
def client():
    """Create FastAPI test client"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_records():
    """Records mixing criteria fields with unrelated ones"""
    return [
        {"name": "Trail A", "distance": "1.5km", "duration": "90m", "color": "ff0000"},
        {"name": "Trail B", "distance": "3 miles", "mass": "2500g", "number": "42"},
        {"name": "Crate", "mass": "10lb", "letter": "b", "element": "0x1f"},
    ]
