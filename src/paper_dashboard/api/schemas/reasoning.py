"""Pydantic schemas for the trade-reasoning feed."""

from datetime import datetime

from pydantic import BaseModel


class ReasoningEntryResponse(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: datetime
    ticker: str
    reasoning: str


class ReasoningResponse(BaseModel):
    available: bool
    entries: list[ReasoningEntryResponse] = []
    count: int = 0
