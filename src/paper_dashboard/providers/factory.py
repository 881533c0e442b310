"""Build providers from settings."""

import logging

from paper_dashboard.config.settings import Settings
from paper_dashboard.core.exceptions import ValidationError
from paper_dashboard.providers.alpaca_provider import AlpacaBrokerageProvider
from paper_dashboard.providers.brokerage_provider import BrokerageProvider
from paper_dashboard.providers.price_bar_provider import PriceBarProvider
from paper_dashboard.providers.reasoning_provider import ReasoningProvider
from paper_dashboard.providers.sheet_provider import GoogleSheetReasoningProvider
from paper_dashboard.providers.stub_provider import (
    StubBrokerageProvider,
    StubPriceBarProvider,
    StubReasoningProvider,
)
from paper_dashboard.providers.twelvedata_provider import TwelveDataPriceBarProvider
from paper_dashboard.providers.yfinance_provider import YFinancePriceBarProvider

logger = logging.getLogger(__name__)


def build_brokerage_provider(settings: Settings) -> BrokerageProvider:
    if settings.use_stub_providers:
        logger.info("Using stub brokerage provider")
        return StubBrokerageProvider()
    if not settings.has_alpaca_credentials:
        logger.warning("Alpaca credentials are not configured; brokerage sections will show no data")
    return AlpacaBrokerageProvider(
        api_key=settings.alpaca_api_key,
        secret_key=settings.alpaca_secret_key,
        base_url=settings.alpaca_base_url,
        timeout_seconds=settings.request_timeout_seconds,
    )


def build_price_bar_provider(settings: Settings) -> PriceBarProvider:
    if settings.use_stub_providers:
        logger.info("Using stub price-bar provider")
        return StubPriceBarProvider()
    name = settings.price_bar_provider.strip().lower()
    if name == "twelvedata":
        return TwelveDataPriceBarProvider(
            api_key=settings.twelvedata_api_key,
            base_url=settings.twelvedata_base_url,
            timeout_seconds=settings.request_timeout_seconds,
        )
    if name == "yfinance":
        return YFinancePriceBarProvider()
    raise ValidationError(f"Unknown price_bar_provider: {settings.price_bar_provider}")


def build_reasoning_provider(settings: Settings) -> ReasoningProvider:
    if settings.use_stub_providers:
        logger.info("Using stub reasoning provider")
        return StubReasoningProvider()
    if not settings.reasoning_sheet_id:
        logger.warning("Reasoning sheet id is not configured; the reasoning feed will show no data")
    return GoogleSheetReasoningProvider(
        sheet_id=settings.reasoning_sheet_id,
        base_url=settings.reasoning_base_url,
        timeout_seconds=settings.request_timeout_seconds,
    )
