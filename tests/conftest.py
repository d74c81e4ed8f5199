from datetime import time
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from quickcourt.core.security import create_user_token, get_password_hash
from quickcourt.database import Base, build_engine, get_db
from quickcourt.main import app
from quickcourt.models import Court, Facility, FacilityStatus, User, UserRole, UserStatus

PASSWORD = "secret123"
# bcrypt is slow on purpose; hash once for every fixture user
PASSWORD_HASH = get_password_hash(PASSWORD)


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'quickcourt_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(email, role=UserRole.user, status=UserStatus.active, name=None):
        user = User(
            name=name or email.split("@")[0].title(),
            email=email,
            password_hash=PASSWORD_HASH,
            role=role.value,
            status=status.value,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_facility(db):
    def _make_facility(owner, status=FacilityStatus.approved, name="Smash Arena", city="Pune", sports=("badminton",)):
        facility = Facility(
            name=name,
            description="Indoor courts with wooden flooring",
            owner_id=owner.id,
            city=city,
            sports_supported=list(sports),
            amenities=["parking"],
            operating_hours={},
            status=status.value,
        )
        db.add(facility)
        db.commit()
        db.refresh(facility)
        return facility
    return _make_facility


@pytest.fixture
def make_court(db):
    def _make_court(facility, price="600.00", name="Court X", is_active=True, sport_type="badminton"):
        court = Court(
            name=name,
            facility_id=facility.id,
            sport_type=sport_type,
            price_per_hour=Decimal(price),
            opening_time=time(6, 0),
            closing_time=time(23, 0),
            is_active=is_active,
        )
        db.add(court)
        db.commit()
        db.refresh(court)
        return court
    return _make_court


@pytest.fixture
def player(make_user):
    return make_user("player@example.com")


@pytest.fixture
def other_player(make_user):
    return make_user("rival@example.com")


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com", role=UserRole.facility_owner)


@pytest.fixture
def other_owner(make_user):
    return make_user("owner2@example.com", role=UserRole.facility_owner)


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", role=UserRole.admin)


@pytest.fixture
def facility(make_facility, owner):
    return make_facility(owner)


@pytest.fixture
def court(make_court, facility):
    return make_court(facility)


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_user_token(user)}"}
    return _auth_headers
