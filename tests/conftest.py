import os
import tempfile

# Point the app at throwaway storage before anything reads config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="traffic-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from ratelimit import otp_limiter, report_limiter

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    otp_limiter.reset()
    report_limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def register(client):
    def _register(name="A", email="a@x.com", phone="1"):
        response = client.post("/api/auth/register", json={"name": name, "email": email, "phone": phone})
        assert response.status_code in (200, 201), response.text
        return response.json()["userId"]
    return _register


@pytest.fixture()
def submit_report(client, register):
    def _submit(vehicle_number="KA01AB1234", violation_type="Signal Jump", reporter_id=None, files=None, **extra):
        data = {
            "reporterId": reporter_id or register(),
            "vehicleNumber": vehicle_number,
            "violationType": violation_type,
            **extra,
        }
        response = client.post("/api/reports", data=data, files=files)
        assert response.status_code == 201, response.text
        return response.json()["reportId"]
    return _submit
