import json
import os
from datetime import date

# Force an in-memory db and a provider that needs no key before the app imports settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LLM_PROVIDER"] = "ollama"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from askchart.db.models import SalesRecord
from askchart.db.session import get_session
from askchart.main import app
from askchart.services.provider import LLMClient, get_llm_client

SAMPLE_SALES = [
    ("Laptop", "Electronics", "North", 1200.0, 2, date(2023, 1, 15)),
    ("Phone", "Electronics", "South", 800.0, 3, date(2023, 3, 2)),
    ("Desk", "Furniture", "North", 300.0, 1, date(2023, 3, 20)),
    ("Chair", "Furniture", "East", 150.0, 4, date(2023, 7, 8)),
    ("Notebook", "Stationery", None, 5.0, 50, date(2024, 2, 11)),
]
TOTAL_REVENUE = sum(price * qty for _, _, _, price, qty, _ in SAMPLE_SALES)


class FakeLLM(LLMClient):
    """Scripted stand-in for the generation service; records every call."""

    name = "fake"

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def complete(self, system, user, *, json_mode=False, max_tokens=200):
        self.calls.append({"system": system, "user": user, "json_mode": json_mode, "max_tokens": max_tokens})
        if not self.responses:
            raise AssertionError("unexpected LLM call")
        reply = self.responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def chart_reply(sql, chart_type, data_key, category_key=None, title="Chart"):
    config = {"type": chart_type, "title": title, "description": "test chart", "dataKey": data_key}
    if category_key:
        config["categoryKey"] = category_key
    return json.dumps({"sqlQuery": sql, "chartConfig": config})


# One shared in-memory db for the whole run, seeded once
@pytest.fixture(scope="session")
def engine():
    test_engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    SQLModel.metadata.create_all(test_engine)
    with Session(test_engine) as session:
        session.add_all([
            SalesRecord(product_name=p, category=c, region=r, price=price, quantity=q, sales_date=d)
            for p, c, r, price, q, d in SAMPLE_SALES
        ])
        session.commit()
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)


# Session and rollback once it is done
@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s
        s.rollback()


@pytest.fixture
def fake_llm():
    return FakeLLM()


# Client
@pytest.fixture
def client(session, fake_llm):
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_llm_client] = lambda: fake_llm

    yield TestClient(app)

    app.dependency_overrides.clear()
