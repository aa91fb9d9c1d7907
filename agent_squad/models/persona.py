"""Persona API models."""

from typing import List
from pydantic import BaseModel, Field


class PersonaResponse(BaseModel):
    """Public persona definition."""

    id: str = Field(description="Persona ID")
    name: str = Field(description="Display name")
    role: str = Field(description="Role title")
    avatar: str = Field(description="Avatar glyph")
    color: str = Field(description="Display color")
    step_title: str = Field(description="Workflow step this persona produces")


class PersonaListResponse(BaseModel):
    """Response model for the persona list."""

    personas: List[PersonaResponse] = Field(description="Personas in pipeline order")
    total: int = Field(description="Number of personas")
