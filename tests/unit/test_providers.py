"""
Unit tests for upstream providers.

Tests cover:
- HTTP failure mapping to UpstreamError
- Alpaca request shape and missing credentials
- Twelve Data parsing and "no data" error codes
- yfinance frames (mocked, no network)
- Google Sheets CSV download for the reasoning feed
- Stub providers and the provider factory
Mock the HTTP session and yfinance to avoid network.
"""

from datetime import date, timedelta

import pytest
import requests

from paper_dashboard.config.settings import Settings
from paper_dashboard.core.exceptions import UpstreamError, ValidationError
from paper_dashboard.providers import (
    AlpacaBrokerageProvider,
    GoogleSheetReasoningProvider,
    StubBrokerageProvider,
    StubPriceBarProvider,
    StubReasoningProvider,
    TwelveDataPriceBarProvider,
    YFinancePriceBarProvider,
    build_brokerage_provider,
    build_price_bar_provider,
    build_reasoning_provider,
)
from paper_dashboard.providers.http import get_json, get_text
from paper_dashboard.services.position_history import build_checkpoints
from paper_dashboard.services.records import parse_account, parse_orders, parse_positions
from paper_dashboard.services.reasoning_service import parse_reasoning_csv

from tests.conftest import at


class FakeResponse:
    def __init__(self, body=None, status_code: int = 200, invalid_json: bool = False, text: str = ""):
        self._body = body
        self.text = text
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self.reason = "OK" if self.ok else "Error"
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value")
        return self._body


class FakeSession:
    """Records GET calls and returns a canned response (or raises)."""

    def __init__(self, response=None, error: Exception = None):
        self.response = response or FakeResponse({})
        self.error = error
        self.calls: list[dict] = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


# =============================================================================
# HTTP HELPER TESTS
# =============================================================================


class TestGetJson:
    """Tests for failure mapping in get_json."""

    @pytest.mark.parametrize(
        "session",
        [
            FakeSession(error=requests.Timeout("slow")),
            FakeSession(error=requests.ConnectionError("refused")),
            FakeSession(FakeResponse({"message": "forbidden"}, status_code=403)),
            FakeSession(FakeResponse(invalid_json=True)),
        ],
    )
    def test_failures_raise_upstream_error(self, session):
        with pytest.raises(UpstreamError) as exc_info:
            get_json(session, "alpaca", "https://example.test/x", timeout=1.0)

        assert exc_info.value.code == "UPSTREAM_ERROR"

    def test_status_code_is_kept(self):
        session = FakeSession(FakeResponse({}, status_code=429))

        with pytest.raises(UpstreamError) as exc_info:
            get_json(session, "alpaca", "https://example.test/x", timeout=1.0)

        assert exc_info.value.status_code == 429

    def test_timeout_is_always_passed(self):
        session = FakeSession(FakeResponse([1, 2]))

        assert get_json(session, "alpaca", "https://example.test/x", timeout=2.5) == [1, 2]
        assert session.calls[0]["timeout"] == 2.5


class TestGetText:
    """Tests for get_text."""

    def test_body_is_returned_as_text(self):
        session = FakeSession(FakeResponse(text="a,b\r\n1,2\r\n"))

        assert get_text(session, "google-sheets", "https://example.test/x", timeout=1.0) == "a,b\r\n1,2\r\n"

    def test_error_status_raises(self):
        session = FakeSession(FakeResponse(status_code=404, text="<html>not found</html>"))

        with pytest.raises(UpstreamError) as exc_info:
            get_text(session, "google-sheets", "https://example.test/x", timeout=1.0)

        assert exc_info.value.status_code == 404


# =============================================================================
# ALPACA TESTS
# =============================================================================


class TestAlpacaProvider:
    """Tests for AlpacaBrokerageProvider."""

    def test_requests_carry_api_key_headers(self):
        session = FakeSession(FakeResponse({"cash": "1.00"}))
        provider = AlpacaBrokerageProvider("key", "secret", base_url="https://paper.test/", session=session)

        provider.get_account()

        call = session.calls[0]
        assert call["url"] == "https://paper.test/v2/account"
        assert call["headers"] == {"APCA-API-KEY-ID": "key", "APCA-API-SECRET-KEY": "secret"}

    def test_orders_request_all_statuses_newest_first(self):
        session = FakeSession(FakeResponse([]))
        provider = AlpacaBrokerageProvider("key", "secret", session=session)

        provider.get_orders(limit=25)

        assert session.calls[0]["url"].endswith("/v2/orders")
        assert session.calls[0]["params"] == {"status": "all", "limit": 25, "direction": "desc"}

    def test_portfolio_history_params(self):
        session = FakeSession(FakeResponse({"equity": [], "timestamp": []}))
        provider = AlpacaBrokerageProvider("key", "secret", session=session)

        provider.get_portfolio_history(period="1W", timeframe="1H")

        assert session.calls[0]["url"].endswith("/v2/account/portfolio/history")
        assert session.calls[0]["params"] == {"period": "1W", "timeframe": "1H"}

    def test_missing_credentials_raise_without_request(self):
        session = FakeSession()
        provider = AlpacaBrokerageProvider(None, None, session=session)

        with pytest.raises(UpstreamError):
            provider.get_positions()
        assert session.calls == []


# =============================================================================
# TWELVE DATA TESTS
# =============================================================================


class TestTwelveDataProvider:
    """Tests for TwelveDataPriceBarProvider."""

    def test_values_are_parsed_ascending_in_utc(self):
        """
        GIVEN Twelve Data values newest first
        WHEN I fetch bars
        THEN they come back ascending with float closes
        """
        body = {
            "status": "ok",
            "values": [
                {"datetime": "2024-06-10 15:00:00", "close": "501.50"},
                {"datetime": "2024-06-10 14:00:00", "close": "500.00"},
            ],
        }
        session = FakeSession(FakeResponse(body))
        provider = TwelveDataPriceBarProvider("td-key", session=session)

        bars = provider.get_hourly_bars("SPY", date(2024, 6, 10), date(2024, 6, 10))

        assert [(b.timestamp, b.close) for b in bars] == [(at(0), 500.0), (at(1), 501.5)]
        params = session.calls[0]["params"]
        assert params["interval"] == "1h"
        assert params["timezone"] == "UTC"
        assert params["start_date"] == "2024-06-10"

    def test_no_data_error_is_empty_list(self):
        body = {"status": "error", "code": 400, "message": "No data is available on the specified dates"}
        provider = TwelveDataPriceBarProvider("td-key", session=FakeSession(FakeResponse(body)))

        assert provider.get_hourly_bars("ACME", date(2024, 6, 1), date(2024, 6, 7)) == []

    def test_other_error_codes_raise(self):
        body = {"status": "error", "code": 429, "message": "API credits exhausted"}
        provider = TwelveDataPriceBarProvider("td-key", session=FakeSession(FakeResponse(body)))

        with pytest.raises(UpstreamError):
            provider.get_hourly_bars("SPY", date(2024, 6, 1), date(2024, 6, 7))

    def test_malformed_values_are_skipped(self):
        body = {"values": [{"datetime": "2024-06-10 14:00:00", "close": "n/a"}, {"close": "1"}]}
        provider = TwelveDataPriceBarProvider("td-key", session=FakeSession(FakeResponse(body)))

        assert provider.get_hourly_bars("SPY", date(2024, 6, 10), date(2024, 6, 10)) == []

    def test_missing_api_key_raises(self):
        with pytest.raises(UpstreamError):
            TwelveDataPriceBarProvider(None, session=FakeSession()).get_hourly_bars(
                "SPY", date(2024, 6, 1), date(2024, 6, 7)
            )


# =============================================================================
# GOOGLE SHEETS TESTS
# =============================================================================


class TestGoogleSheetReasoningProvider:
    """Tests for GoogleSheetReasoningProvider."""

    def test_downloads_csv_export(self):
        """
        GIVEN a sheet id
        WHEN I fetch the reasoning CSV
        THEN the sheet's export URL is requested as CSV and the text returned
        """
        session = FakeSession(FakeResponse(text="Timestamp,Ticker,Reasoning\n"))
        provider = GoogleSheetReasoningProvider("sheet-123", base_url="https://sheets.test/d/", session=session)

        assert provider.get_reasoning_csv() == "Timestamp,Ticker,Reasoning\n"
        assert session.calls[0]["url"] == "https://sheets.test/d/sheet-123/export"
        assert session.calls[0]["params"] == {"format": "csv"}

    def test_missing_sheet_id_raises_without_request(self):
        session = FakeSession()

        with pytest.raises(UpstreamError):
            GoogleSheetReasoningProvider(None, session=session).get_reasoning_csv()
        assert session.calls == []

    def test_unpublished_sheet_raises(self):
        session = FakeSession(FakeResponse(status_code=401))

        with pytest.raises(UpstreamError) as exc_info:
            GoogleSheetReasoningProvider("sheet-123", session=session).get_reasoning_csv()

        assert exc_info.value.status_code == 401


# =============================================================================
# YFINANCE TESTS
# =============================================================================


class TestYFinanceProvider:
    """Tests for YFinancePriceBarProvider with a mocked yfinance module."""

    def _patch_history(self, monkeypatch, history):
        ticker = type("Ticker", (), {"__init__": lambda self, symbol: None, "history": history})
        monkeypatch.setattr(
            "paper_dashboard.providers.yfinance_provider._get_yf",
            lambda: type("yf", (), {"Ticker": ticker})(),
        )

    def test_close_column_becomes_bars(self, monkeypatch):
        import pandas as pd

        captured = {}

        def history(self, **kwargs):
            captured.update(kwargs)
            idx = pd.DatetimeIndex([
                pd.Timestamp("2024-06-10 10:30", tz="America/New_York"),
                pd.Timestamp("2024-06-10 11:30", tz="America/New_York"),
            ])
            return pd.DataFrame({"Close": [190.0, float("nan")]}, index=idx)

        self._patch_history(monkeypatch, history)

        bars = YFinancePriceBarProvider().get_hourly_bars("AAPL", date(2024, 6, 10), date(2024, 6, 10))

        assert [(b.timestamp, b.close) for b in bars] == [(at(0.5), 190.0)]
        assert captured["interval"] == "1h"
        assert captured["end"] == date(2024, 6, 10) + timedelta(days=1)

    def test_empty_frame_is_no_data(self, monkeypatch):
        import pandas as pd

        self._patch_history(monkeypatch, lambda self, **kwargs: pd.DataFrame())

        assert YFinancePriceBarProvider().get_hourly_bars("ACME", date(2024, 6, 10), date(2024, 6, 10)) == []

    def test_library_errors_become_upstream_errors(self, monkeypatch):
        def history(self, **kwargs):
            raise RuntimeError("rate limited")

        self._patch_history(monkeypatch, history)

        with pytest.raises(UpstreamError):
            YFinancePriceBarProvider().get_hourly_bars("AAPL", date(2024, 6, 10), date(2024, 6, 10))


# =============================================================================
# STUB AND FACTORY TESTS
# =============================================================================


class TestStubProviders:
    """Tests for the offline stub providers."""

    def test_stub_brokerage_bodies_parse(self):
        provider = StubBrokerageProvider(as_of=at(200))

        assert parse_account(provider.get_account()) is not None
        assert [p.symbol for p in parse_positions(provider.get_positions())] == ["AAPL", "MSFT"]
        orders = parse_orders(provider.get_orders())
        assert len(orders) == 5
        assert orders == sorted(orders, key=lambda o: o.timestamp, reverse=True)

    def test_stub_history_is_reproducible(self):
        first = StubBrokerageProvider(as_of=at(200)).get_portfolio_history()
        second = StubBrokerageProvider(as_of=at(200)).get_portfolio_history()

        assert first == second
        assert len(build_checkpoints(first["equity"], first["timestamp"], min_value=1000.0)) == 7 * 24 + 1

    def test_stub_bars_cover_known_symbols_only(self):
        provider = StubPriceBarProvider()

        assert len(provider.get_hourly_bars("SPY", date(2024, 6, 10), date(2024, 6, 10))) == 24
        assert provider.get_hourly_bars("ACME", date(2024, 6, 10), date(2024, 6, 10)) == []

    def test_stub_reasoning_has_a_row_per_order(self):
        """
        GIVEN the stub orders
        WHEN I parse the stub reasoning sheet
        THEN every order has a note, timestamped like its order
        """
        entries = parse_reasoning_csv(StubReasoningProvider(as_of=at(200)).get_reasoning_csv())
        orders = parse_orders(StubBrokerageProvider(as_of=at(200)).get_orders())

        assert len(entries) == 5
        assert sorted((e.ticker, e.timestamp) for e in entries) == sorted((o.symbol, o.timestamp) for o in orders)
        assert entries[1].reasoning == "BUY: Cloud growth re-accelerating, adding a starter position"


class TestFactory:
    """Tests for building providers from settings."""

    def test_stub_mode(self):
        settings = Settings(use_stub_providers=True)

        assert isinstance(build_brokerage_provider(settings), StubBrokerageProvider)
        assert isinstance(build_price_bar_provider(settings), StubPriceBarProvider)
        assert isinstance(build_reasoning_provider(settings), StubReasoningProvider)

    def test_reasoning_provider_uses_sheet(self):
        provider = build_reasoning_provider(Settings(reasoning_sheet_id="sheet-123"))

        assert isinstance(provider, GoogleSheetReasoningProvider)

    def test_named_price_providers(self):
        assert isinstance(
            build_price_bar_provider(Settings(price_bar_provider="twelvedata")),
            TwelveDataPriceBarProvider,
        )
        assert isinstance(
            build_price_bar_provider(Settings(price_bar_provider="YFinance")),
            YFinancePriceBarProvider,
        )
        assert isinstance(
            build_brokerage_provider(Settings(alpaca_api_key="k", alpaca_secret_key="s")),
            AlpacaBrokerageProvider,
        )

    def test_unknown_price_provider_is_rejected(self):
        with pytest.raises(ValidationError):
            build_price_bar_provider(Settings(price_bar_provider="bloomberg"))
