"""Upstream data providers."""

from paper_dashboard.providers.brokerage_provider import BrokerageProvider
from paper_dashboard.providers.price_bar_provider import PriceBarProvider
from paper_dashboard.providers.reasoning_provider import ReasoningProvider
from paper_dashboard.providers.alpaca_provider import AlpacaBrokerageProvider
from paper_dashboard.providers.twelvedata_provider import TwelveDataPriceBarProvider
from paper_dashboard.providers.yfinance_provider import YFinancePriceBarProvider
from paper_dashboard.providers.sheet_provider import GoogleSheetReasoningProvider
from paper_dashboard.providers.stub_provider import (
    StubBrokerageProvider,
    StubPriceBarProvider,
    StubReasoningProvider,
)
from paper_dashboard.providers.factory import (
    build_brokerage_provider,
    build_price_bar_provider,
    build_reasoning_provider,
)

__all__ = [
    "BrokerageProvider",
    "PriceBarProvider",
    "ReasoningProvider",
    "AlpacaBrokerageProvider",
    "TwelveDataPriceBarProvider",
    "YFinancePriceBarProvider",
    "GoogleSheetReasoningProvider",
    "StubBrokerageProvider",
    "StubPriceBarProvider",
    "StubReasoningProvider",
    "build_brokerage_provider",
    "build_price_bar_provider",
    "build_reasoning_provider",
]
