"""Trade-reasoning feed provider protocol."""

from typing import Protocol


class ReasoningProvider(Protocol):
    """
    The trade-reasoning sheet as CSV text (Timestamp, Ticker, Reasoning).

    The text is returned unparsed so it can be cached as received. Any
    failure raises UpstreamError.
    """

    def get_reasoning_csv(self) -> str:
        ...
