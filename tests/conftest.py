"""
Shared pytest configuration and fixtures for all tests.
"""

import sys
from pathlib import Path

# Add project root to sys.path to enable importing project modules
# This allows tests to import from 'core', 'sql', 'models', 'utils' without installation
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests - isolated function-level tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interactions")
    config.addinivalue_line("markers", "smoke: Smoke tests - basic functionality checks")
    config.addinivalue_line("markers", "edge_case: Edge case tests - boundary conditions")
    config.addinivalue_line("markers", "regression: Regression tests - previously fixed bugs")


# =========================
# Shared record type models
# =========================

import uuid  # noqa: E402
from dataclasses import dataclass, field  # noqa: E402
from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Optional  # noqa: E402

import pytest  # noqa: E402

from models.record_types import non_editable  # noqa: E402


@dataclass
class Person:
    """Two editable columns, both nullable."""
    Name: Optional[str] = None
    Age: Optional[int] = None


@dataclass
class SampleNullableDataTypes:
    """Every supported semantic type, mandatory and nullable, behind an identity key."""
    PrimaryKeyId: int = non_editable(default=0)
    MandatoryGuidValue: uuid.UUID = field(default_factory=uuid.uuid4)
    NullableGuidValue: Optional[uuid.UUID] = None
    MandatoryStringType: str = 'Mandatory String Value'
    NullableStringType: Optional[str] = None
    MandatoryIntegerValue: int = 10
    NullableIntegerValue: Optional[int] = None
    MandatoryDecimalValue: Decimal = Decimal('11')
    NullableDecimalValue: Optional[Decimal] = None
    CreatedDate: datetime = field(default_factory=datetime.now)
    LastModifiedDate: Optional[datetime] = None
    MandatoryDoubleType: float = 12.0
    NullableDoubleType: Optional[float] = None


@pytest.fixture
def person_type():
    """Record type with editable Name and Age columns."""
    return Person


@pytest.fixture
def sample_types_record_type():
    """Record type covering every semantic type with a non-editable key."""
    return SampleNullableDataTypes
