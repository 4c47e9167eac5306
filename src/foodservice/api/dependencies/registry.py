"""Entity registry dependency."""

from typing import Annotated

from fastapi import Depends, Request

from src.foodservice.crud import EntityRegistry


def get_registry(request: Request) -> EntityRegistry:
    """The registry built for this app instance."""
    return request.app.state.registry


Registry = Annotated[EntityRegistry, Depends(get_registry)]
