"""
Pytest configuration and fixtures
"""
import os

# Keep the app's own engine off the filesystem; tests bind their own engine below
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from leavedesk.main import app
from leavedesk.db.base import Base
from leavedesk.core.deps import get_db, get_today

# Import all models to ensure they're registered with Base.metadata
from leavedesk.models import LeaveBalanceRecord, LeaveRequest, Holiday  # noqa: F401
from leavedesk.models.holiday import HolidayType, OfficeStatus

# Wednesday; tests pin "today" so eligibility and accrual are deterministic
TODAY = date(2026, 3, 18)

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database and calendar-date overrides"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def add_balance(db):
    """Factory fixture: store a leave balance record and return it"""
    def _add(employee_email="thandi@example.co.za", year=2026, **overrides):
        values = {
            "employee_name": "Thandi Mokoena",
            "department": "Finance",
            "manager": "manager@example.co.za",
            "start_date": date(2020, 1, 6),
            "brought_forward": Decimal("5"),
            "annual_leave_adjustments": Decimal("1"),
            "annual_used": Decimal("3"),
            "sick_used": Decimal("4"),
        }
        values.update(overrides)
        row = LeaveBalanceRecord(employee_email=employee_email, year=year, **values)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    return _add


@pytest.fixture
def add_holiday(db):
    """Factory fixture: store a holiday (closed office, public by default)"""
    def _add(day, name="Holiday", type=HolidayType.PUBLIC, office_status=OfficeStatus.CLOSED):
        holiday = Holiday(date=day, name=name, type=type, office_status=office_status)
        db.add(holiday)
        db.commit()
        return holiday
    return _add
