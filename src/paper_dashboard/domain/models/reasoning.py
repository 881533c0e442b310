"""Trade-reasoning notes kept alongside the trades."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ReasoningEntry:
    """One row of the trade-reasoning sheet."""

    timestamp: datetime
    ticker: str
    reasoning: str
