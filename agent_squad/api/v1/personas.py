"""Persona REST API routes - V1."""

from fastapi import APIRouter

from ...agents import persona_registry
from ...models.persona import PersonaResponse, PersonaListResponse

router = APIRouter(prefix="/api/v1/personas", tags=["Personas"])


@router.get("", response_model=PersonaListResponse)
async def list_personas():
    """List the agent team in pipeline order."""
    personas = [
        PersonaResponse(
            id=p.id,
            name=p.name,
            role=p.role,
            avatar=p.avatar,
            color=p.color,
            step_title=p.step_title
        )
        for p in persona_registry.list()
    ]
    return PersonaListResponse(personas=personas, total=len(personas))
