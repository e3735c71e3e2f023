"""Game API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from api.coordinator import TableCoordinator, get_coordinator
from api.schemas import GameActionRequest, GameEventResponse, GameStateResponse

router = APIRouter()

Coordinator = Annotated[TableCoordinator, Depends(get_coordinator)]


@router.get("/state")
async def get_state(coordinator: Coordinator) -> GameStateResponse:
    """Get current table state."""
    return GameStateResponse.from_state(coordinator.table.state)


@router.post("/actions")
async def post_action(
    request: GameActionRequest,
    coordinator: Coordinator,
) -> GameStateResponse:
    """Apply an action as if it arrived over the socket; everyone connected sees the result."""
    state = coordinator.handle_action(request.model_dump(by_alias=True))
    return GameStateResponse.from_state(state)


@router.get("/history")
async def get_history(coordinator: Coordinator) -> list[GameEventResponse]:
    """List the events of the current game, oldest first."""
    return [GameEventResponse.from_event(e) for e in coordinator.history]
