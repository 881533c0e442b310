"""
Pytest configuration and fixtures for paper-trading dashboard tests.

This module provides:
- A controllable clock for cache TTL tests
- Builders for Alpaca-shaped upstream bodies
- Deterministic, failing and empty providers
- In-memory SQLite database fixtures
- Service and API client fixtures
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from paper_dashboard.main import app
from paper_dashboard.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from paper_dashboard.repositories.sqlalchemy import orm_models  # noqa: F401
from paper_dashboard.repositories.sqlalchemy import SqlAlchemySyncRepository
from paper_dashboard.config.settings import Settings, reset_settings, set_settings
from paper_dashboard.core.exceptions import UpstreamError
from paper_dashboard.core.timezone import UTC
from paper_dashboard.domain.models import Fill, OrderSide, PriceBar, ValuationCheckpoint
from paper_dashboard.services import (
    BrokerageService,
    DashboardService,
    PriceHistoryService,
    ReasoningService,
    ResponseCache,
    SyncService,
)


# =============================================================================
# TIME HELPERS
# =============================================================================


T0 = datetime(2024, 6, 10, 14, 0, 0, tzinfo=UTC)


def at(hours: float) -> datetime:
    """UTC datetime `hours` after the reference time T0."""
    return T0 + timedelta(hours=hours)


class FakeClock:
    """Wall clock in epoch seconds that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' for deterministic synthetic series (T0 + 8h)."""
    return at(8)


# =============================================================================
# DOMAIN BUILDERS
# =============================================================================


def make_fill(
    symbol: str,
    side: str,
    quantity: str,
    hours: float,
    price: Optional[str] = "100",
) -> Fill:
    """Fill at T0 + hours."""
    return Fill(
        symbol=symbol,
        side=OrderSide(side.upper()),
        quantity=Decimal(quantity),
        timestamp=at(hours),
        price=Decimal(price) if price is not None else None,
    )


def make_checkpoints(hours: list[float], value: float = 100000.0) -> list[ValuationCheckpoint]:
    return [ValuationCheckpoint(timestamp=at(h), value=value + h) for h in hours]


def make_bars(start_hours: float, count: int, close: float = 500.0, step: float = 1.0) -> list[PriceBar]:
    """Hourly bars whose close rises by `step` each hour."""
    return [
        PriceBar(timestamp=at(start_hours + i), close=close + i * step)
        for i in range(count)
    ]


# =============================================================================
# UPSTREAM BODY BUILDERS (Alpaca-shaped, numbers as strings)
# =============================================================================


def account_body(
    portfolio_value: str = "101000.00",
    cash: str = "91000.00",
    equity: Optional[str] = None,
    last_equity: str = "100500.00",
) -> dict:
    return {
        "account_number": "PA0000TEST",
        "status": "ACTIVE",
        "portfolio_value": portfolio_value,
        "cash": cash,
        "buying_power": "182000.00",
        "equity": equity or portfolio_value,
        "last_equity": last_equity,
    }


def position_body(
    symbol: str = "AAPL",
    qty: str = "10",
    avg_entry_price: str = "100.00",
    current_price: str = "110.00",
) -> dict:
    q, entry, current = float(qty), float(avg_entry_price), float(current_price)
    return {
        "asset_id": f"asset-{symbol.lower()}",
        "symbol": symbol,
        "qty": qty,
        "side": "long",
        "market_value": f"{q * current:.2f}",
        "cost_basis": f"{q * entry:.2f}",
        "avg_entry_price": avg_entry_price,
        "unrealized_pl": f"{q * (current - entry):.2f}",
        "unrealized_plpc": f"{(current - entry) / entry:.6f}",
        "current_price": current_price,
    }


def order_body(
    symbol: str,
    side: str,
    qty: str,
    hours: float,
    price: Optional[str] = "100.00",
    status: str = "filled",
    order_id: Optional[str] = None,
) -> dict:
    when = at(hours).isoformat()
    return {
        "id": order_id or f"order-{symbol.lower()}-{side}-{hours}",
        "symbol": symbol,
        "side": side,
        "qty": qty,
        "filled_qty": qty if price is not None else "0",
        "filled_avg_price": price,
        "type": "market",
        "status": status,
        "submitted_at": when,
        "filled_at": when if price is not None else None,
    }


def history_body(hours: list[float], values: list[float]) -> dict:
    return {
        "equity": values,
        "timestamp": [int(at(h).timestamp()) for h in hours],
        "timeframe": "1H",
    }


# =============================================================================
# PROVIDER FAKES
# =============================================================================


class FakeBrokerageProvider:
    """
    Brokerage provider returning fixed bodies and counting calls.

    Default scenario: AAPL bought (10 @ 100) and still held, MSFT bought and
    sold flat (closed), one canceled NVDA order; hourly history from T0 to T0+6h.
    """

    def __init__(
        self,
        account: Any = None,
        positions: Any = None,
        orders: Any = None,
        history: Any = None,
    ):
        self.account = account if account is not None else account_body()
        self.positions = positions if positions is not None else [position_body()]
        self.orders = orders if orders is not None else [
            order_body("NVDA", "buy", "3", 5.5, price=None, status="canceled"),
            order_body("MSFT", "sell", "5", 3, price="380.00"),
            order_body("MSFT", "buy", "5", 1, price="370.00"),
            order_body("AAPL", "buy", "10", -2, price="100.00"),
        ]
        self.history = history if history is not None else history_body(
            [0, 1, 2, 3, 4, 5, 6],
            [100000.0, 100100.0, 100050.0, 100200.0, 100300.0, 100250.0, 101000.0],
        )
        self.calls: dict[str, int] = {"account": 0, "positions": 0, "orders": 0, "history": 0}

    def get_account(self) -> Any:
        self.calls["account"] += 1
        return self.account

    def get_positions(self) -> Any:
        self.calls["positions"] += 1
        return self.positions

    def get_orders(self, limit: int = 50) -> Any:
        self.calls["orders"] += 1
        return self.orders[:limit]

    def get_portfolio_history(self, period: str = "1W", timeframe: str = "1H") -> Any:
        self.calls["history"] += 1
        return self.history


class FailingBrokerageProvider:
    """Brokerage provider whose every call fails like an unreachable API."""

    def __init__(self):
        self.calls = 0

    def _fail(self) -> Any:
        self.calls += 1
        raise UpstreamError("alpaca", "503 Service Unavailable", status_code=503)

    def get_account(self) -> Any:
        return self._fail()

    def get_positions(self) -> Any:
        return self._fail()

    def get_orders(self, limit: int = 50) -> Any:
        return self._fail()

    def get_portfolio_history(self, period: str = "1W", timeframe: str = "1H") -> Any:
        return self._fail()


class FakePriceBarProvider:
    """
    Fixed bars per symbol, filtered to the requested UTC dates like a real
    provider. Unknown symbols have no data. Records calls.
    """

    def __init__(self, bars: Optional[dict[str, list[PriceBar]]] = None):
        self.bars = bars if bars is not None else {
            "AAPL": make_bars(-3, 12, close=100.0),
            "SPY": make_bars(-3, 12, close=500.0),
        }
        self.calls: list[tuple] = []

    def get_hourly_bars(self, symbol, start, end) -> list[PriceBar]:
        self.calls.append((symbol, start, end))
        return [
            bar for bar in self.bars.get(symbol.upper(), [])
            if start <= bar.timestamp.date() <= end
        ]


class FailingPriceBarProvider:
    """Price-bar provider that always fails."""

    def __init__(self):
        self.calls = 0

    def get_hourly_bars(self, symbol, start, end) -> list[PriceBar]:
        self.calls += 1
        raise UpstreamError("twelvedata", "timed out after 10.0s")


REASONING_CSV = (
    "Timestamp,Ticker,Reasoning\r\n"
    '10/06/2024 14:30:00,AAPL,"Earnings beat, raising target"\r\n'
    "10-06-2024 15:05,msft,Cloud growth\r\n"
    "\r\n"
    "sometime,NVDA,Unreadable timestamp\r\n"
    "11/06/2024 09:00,TSLA\r\n"
    "2024-06-11T10:00:00Z,SPY,Hedge, trimmed exposure\r\n"
)


class FakeReasoningProvider:
    """
    Fixed reasoning-sheet CSV. The default text has a quoted comma, both
    day-first date styles, an ISO row, a blank row and two malformed rows.
    Counts calls.
    """

    def __init__(self, text: str = REASONING_CSV):
        self.text = text
        self.calls = 0

    def get_reasoning_csv(self) -> str:
        self.calls += 1
        return self.text


class FailingReasoningProvider:
    """Reasoning provider whose sheet download always fails."""

    def __init__(self):
        self.calls = 0

    def get_reasoning_csv(self) -> str:
        self.calls += 1
        raise UpstreamError("google-sheets", "404 Not Found", status_code=404)


@pytest.fixture
def brokerage_provider() -> FakeBrokerageProvider:
    return FakeBrokerageProvider()


@pytest.fixture
def failing_brokerage_provider() -> FailingBrokerageProvider:
    return FailingBrokerageProvider()


@pytest.fixture
def price_provider() -> FakePriceBarProvider:
    return FakePriceBarProvider()


@pytest.fixture
def failing_price_provider() -> FailingPriceBarProvider:
    return FailingPriceBarProvider()


@pytest.fixture
def reasoning_provider() -> FakeReasoningProvider:
    return FakeReasoningProvider()


@pytest.fixture
def failing_reasoning_provider() -> FailingReasoningProvider:
    return FailingReasoningProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def cache(clock) -> ResponseCache:
    """ResponseCache with 60s/3600s TTLs on the fake clock."""
    return ResponseCache(short_ttl_seconds=60, long_ttl_seconds=3600, clock=clock)


@pytest.fixture
def brokerage_service(brokerage_provider, cache) -> BrokerageService:
    return BrokerageService(provider=brokerage_provider, cache=cache, history_min_equity=1000.0)


@pytest.fixture
def price_history_service(price_provider, cache) -> PriceHistoryService:
    return PriceHistoryService(provider=price_provider, cache=cache, benchmark_symbol="SPY")


@pytest.fixture
def dashboard_service(brokerage_service, price_history_service) -> DashboardService:
    return DashboardService(
        brokerage=brokerage_service,
        prices=price_history_service,
        starting_capital=100000.0,
        benchmark_max_gap_hours=2.0,
    )


@pytest.fixture
def reasoning_service(reasoning_provider, cache) -> ReasoningService:
    return ReasoningService(provider=reasoning_provider, cache=cache)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sync_repo(test_session) -> SqlAlchemySyncRepository:
    """Provide test SyncRepository."""
    return SqlAlchemySyncRepository(test_session)


@pytest.fixture
def sync_service(brokerage_provider, sync_repo, fixed_now) -> SyncService:
    return SyncService(
        provider=brokerage_provider,
        repo=sync_repo,
        starting_capital=100000.0,
        now_fn=lambda: fixed_now,
    )


# =============================================================================
# API TEST CLIENT FIXTURES
# =============================================================================


def _make_client(test_engine, tmp_path, brokerage, prices, reasoning, clock):
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    # Startup runs init_db against this throwaway in-memory database
    set_settings(Settings(data_dir=tmp_path, database_url="sqlite://", use_stub_providers=True))
    reset_database()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        # Swap the startup-built cache and providers for test doubles
        app.state.cache = ResponseCache(short_ttl_seconds=60, long_ttl_seconds=3600, clock=clock)
        app.state.brokerage_provider = brokerage
        app.state.price_bar_provider = prices
        app.state.reasoning_provider = reasoning
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


@pytest.fixture
def client(test_engine, tmp_path, brokerage_provider, price_provider, reasoning_provider, clock) -> TestClient:
    """Provide FastAPI test client with fake providers and test database."""
    yield from _make_client(test_engine, tmp_path, brokerage_provider, price_provider, reasoning_provider, clock)


@pytest.fixture
def failing_client(
    test_engine,
    tmp_path,
    failing_brokerage_provider,
    failing_price_provider,
    failing_reasoning_provider,
    clock,
) -> TestClient:
    """Test client whose upstream providers are all unreachable."""
    yield from _make_client(
        test_engine,
        tmp_path,
        failing_brokerage_provider,
        failing_price_provider,
        failing_reasoning_provider,
        clock,
    )
