"""
Factories for persisted rows. Each factory is an async callable taking
overrides, so a test only spells out the fields it cares about:

    employee = await create_employee(department="Finance")
"""

from datetime import timedelta

import pytest
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from icms.core.security import hash_password
from icms.database.unit_of_work import unit_of_work
from icms.models import Admin, DailyTask, Employee, Employer, Meeting, Stakeholder, TaskHelper
from icms.repositories.base_repository import BaseRepository
from icms.services.travel_service import TravelRequestService
from icms.utils.dates import utc_now


@pytest.fixture(scope="session")
def fake() -> Faker:
    Faker.seed(1234)
    return Faker()


def _factory(db_session: AsyncSession, model, defaults):
    repo = BaseRepository(model, db_session)

    async def _create(**overrides):
        data = defaults()
        data.update(overrides)
        async with unit_of_work(db_session, model.__name__):
            return await repo.create(**data)

    return _create


@pytest.fixture
def employee_payload(fake):
    """A V1/V2 create body in wire form."""
    def _payload(**overrides):
        body = {
            "firstName": fake.first_name(),
            "lastName": fake.last_name(),
            "email": fake.unique.email(),
            "department": "Operations",
            "position": "Coordinator",
            "status": "ACTIVE",
        }
        body.update(overrides)
        return body
    return _payload


@pytest.fixture
def create_employee(db_session, fake):
    counter = iter(range(1, 10_000))
    return _factory(db_session, Employee, lambda: {
        "emp_id": f"EMP-T{next(counter):04d}",
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "email": fake.unique.email(),
        "department": "Operations",
        "position": "Coordinator",
    })


@pytest.fixture
def create_employer(db_session, fake):
    return _factory(db_session, Employer, lambda: {
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "company_name": fake.company(),
    })


@pytest.fixture
def create_stakeholder(db_session, fake):
    return _factory(db_session, Stakeholder, lambda: {
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "email": fake.unique.email(),
        "relationship": "Partner",
    })


@pytest.fixture
def create_task_helper(db_session, fake):
    return _factory(db_session, TaskHelper, lambda: {
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "primary_phone": "+15550100",
    })


@pytest.fixture
def create_meeting(db_session):
    return _factory(db_session, Meeting, lambda: {
        "title": "Weekly sync",
        "date": utc_now() + timedelta(hours=2),
        "start_time": "10:00",
        "end_time": "11:00",
        "organizer": "Office",
    })


@pytest.fixture
def create_daily_task(db_session):
    return _factory(db_session, DailyTask, lambda: {
        "title": "Collect documents",
        "date": utc_now(),
    })


@pytest.fixture
def create_admin(db_session):
    """`await create_admin(password="pw")` stores the bcrypt hash of `password`."""
    repo = BaseRepository(Admin, db_session)

    async def _create(password: str = "correct horse", **overrides):
        data = {
            "username": "admin",
            "email": "admin@icms.test",
            "password_hash": hash_password(password),
            "role": "ADMIN",
        }
        data.update(overrides)
        async with unit_of_work(db_session, "Admin"):
            return await repo.create(**data)

    return _create


@pytest.fixture
def create_travel_request(db_session):
    service = TravelRequestService(db_session)

    async def _create(destinations=(), **overrides):
        fields = {"trip_start_date": utc_now() + timedelta(days=7), "trip_end_date": utc_now() + timedelta(days=10)}
        fields.update(overrides)
        return await service.create(fields, destinations=destinations)

    return _create
