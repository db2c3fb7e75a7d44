"""
Shared test fixtures — TestClient, temporary SQLite store, stub Coincheck API.
"""

import os
import tempfile

# Set environment variables BEFORE any app imports so nothing touches ./data
_TEST_DIR = tempfile.mkdtemp(prefix="rate_chart_test_")
os.environ.setdefault("LOG_DIR", os.path.join(_TEST_DIR, "logs"))
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault(
    "DATABASE_URL", f"sqlite:///{os.path.join(_TEST_DIR, 'rates.db')}"
)

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from api.dependencies import get_rate_series_resolver  # noqa: E402
from api.rate_limit import limiter  # noqa: E402
from application.rate_series_service import RateSeriesResolver  # noqa: E402
from infrastructure.database import engine as test_engine  # noqa: E402
from infrastructure.rate_store import SqlRateStore  # noqa: E402
from main import app  # noqa: E402
from tests.doubles import CountingStore, StubRateSource  # noqa: E402


# ---------------------------------------------------------------------------
# Database lifecycle
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session", autouse=True)
def _create_tables():
    """Create all tables once for the test session."""
    import domain.entities  # noqa: F401 — register models with SQLModel

    SQLModel.metadata.create_all(test_engine)
    yield
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(autouse=True)
def _clean_tables():
    """Truncate all tables between tests for isolation."""
    yield
    with Session(test_engine) as session:
        for table in reversed(SQLModel.metadata.sorted_tables):
            session.exec(table.delete())  # type: ignore[arg-type]
        session.commit()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    with Session(test_engine) as session:
        yield session


@pytest.fixture()
def rate_store() -> CountingStore:
    return CountingStore(SqlRateStore(test_engine))


@pytest.fixture()
def rate_source() -> StubRateSource:
    return StubRateSource()


@pytest.fixture()
def sleeps() -> list[float]:
    """Pacing pauses recorded instead of actually sleeping."""
    return []


@pytest.fixture()
def client(
    rate_store: CountingStore, rate_source: StubRateSource, sleeps: list[float]
) -> Generator[TestClient, None, None]:
    """TestClient whose resolver uses the temp SQLite store and the stub API."""

    def _override_resolver() -> RateSeriesResolver:
        return RateSeriesResolver(
            store=rate_store, source=rate_source, sleep=sleeps.append
        )

    app.dependency_overrides[get_rate_series_resolver] = _override_resolver
    limiter.reset()

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
