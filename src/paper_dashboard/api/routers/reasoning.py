"""Trade-reasoning feed endpoint."""

from fastapi import APIRouter, Depends

from paper_dashboard.api.deps import get_reasoning_service
from paper_dashboard.api.schemas import ReasoningEntryResponse, ReasoningResponse
from paper_dashboard.services import ReasoningService

router = APIRouter(tags=["reasoning"])


@router.get("/reasoning", response_model=ReasoningResponse)
def get_reasoning(
    service: ReasoningService = Depends(get_reasoning_service),
) -> ReasoningResponse:
    """Notes explaining each trade, in sheet order. Malformed rows are left out."""
    entries = service.get_entries()
    if entries is None:
        return ReasoningResponse(available=False)
    return ReasoningResponse(
        available=True,
        entries=[ReasoningEntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )
