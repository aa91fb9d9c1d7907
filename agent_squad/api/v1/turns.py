"""Turn submission REST API routes - V1."""

from fastapi import APIRouter, HTTPException, Depends

from ...models.turn import SubmitTurnRequest, SubmitTurnResponse
from ...errors import ConversationNotFound, InvalidTurn, TurnFailed
from ...services import Coordinator
from ...utils.logger import get_app_logger

router = APIRouter(prefix="/api/v1", tags=["Turns"])

# Coordinator instance (set by main.py)
coordinator: Coordinator = None

logger = get_app_logger()


def get_coordinator() -> Coordinator:
    """Dependency to get the coordinator."""
    if coordinator is None:
        raise HTTPException(status_code=500, detail="Coordinator not initialized")
    return coordinator


@router.post("/agent-coordinator", response_model=SubmitTurnResponse)
async def submit_turn(
    request: SubmitTurnRequest,
    coord: Coordinator = Depends(get_coordinator)
):
    """Submit a user utterance and run the persona pipeline."""
    try:
        result = await coord.handle_user_turn(
            utterance=request.message,
            conversation_id=request.conversation_id,
            user_id=request.user_id
        )
    except InvalidTurn as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TurnFailed as e:
        if isinstance(e.__cause__, ConversationNotFound):
            raise HTTPException(status_code=404, detail=str(e.__cause__))
        logger.error(f"Error in agent-coordinator: {e}")
        raise HTTPException(status_code=500, detail="Failed to process turn")

    return SubmitTurnResponse(success=True, conversation_id=result.conversation_id)
