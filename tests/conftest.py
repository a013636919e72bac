import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.pop("BREVO_API_KEY", None)

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import enable_sqlite_savepoints, get_session
from main import app
from models import Base
from services import utility_service
from tests.factories import add_order, add_property, add_room, make_token


@pytest.fixture
def engine():
     engine = create_engine(
          "sqlite://",
          connect_args={"check_same_thread": False},
          poolclass=StaticPool,
     )
     enable_sqlite_savepoints(engine)
     Base.metadata.create_all(bind=engine)
     yield engine
     engine.dispose()


@pytest.fixture
def session_factory(engine):
     return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
     session = session_factory()
     yield session
     session.rollback()
     session.close()


@pytest.fixture
def client(session_factory):
     def override_get_session():
          session = session_factory()
          try:
               yield session
               session.commit()
          except Exception:
               session.rollback()
               raise
          finally:
               session.close()

     app.dependency_overrides[get_session] = override_get_session
     with TestClient(app) as test_client:
          yield test_client
     app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
     return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def future_due_date():
     return date.today() + timedelta(days=30)


@pytest.fixture
def may_2024(db):
     """
     One active room with t1 and t2 at 10000, a 2000 water bill and
     15.00 of delivered meals for t1 in May 2024.
     """
     prop = add_property(db)
     room = add_room(db, prop, ["t1", "t2"])
     utility_service.create_bill(
          db,
          property_id=prop.id,
          month="2024-05",
          type="water",
          amount=2000,
          due_date=date(2024, 6, 5),
     )
     db.commit()
     add_order(db, "t1", 900, datetime(2024, 5, 3, 12, 0))
     add_order(db, "t1", 600, datetime(2024, 5, 20, 18, 30))
     return {"property": prop, "room": room}
