"""Player API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from api.schemas import (
    PlayerNameUpdateRequest,
    PlayerRankingResponse,
    PlayerRequest,
    PlayerResponse,
)
from api.storage import get_stores
from core.players import PlayerService

router = APIRouter()


async def get_player_service() -> PlayerService:
    """Build the player service over the configured store."""
    _, players = await get_stores()
    return PlayerService(players)


PlayerServiceDep = Annotated[PlayerService, Depends(get_player_service)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_player(request: PlayerRequest, service: PlayerServiceDep) -> PlayerResponse:
    """Register a new player."""
    return PlayerResponse.from_player(await service.register(request.name))


@router.get("")
async def list_players(service: PlayerServiceDep) -> list[PlayerResponse]:
    """List every player."""
    return [PlayerResponse.from_player(p) for p in await service.list_players()]


# Declared before /{player_id} so "ranking" is not taken for an id
@router.get("/ranking")
async def get_ranking(service: PlayerServiceDep) -> list[PlayerRankingResponse]:
    """Players ordered by win rate, then total score."""
    return [PlayerRankingResponse.from_ranking(r) for r in await service.ranking()]


@router.get("/{player_id}")
async def get_player(player_id: str, service: PlayerServiceDep) -> PlayerResponse:
    """Get one player."""
    return PlayerResponse.from_player(await service.get_by_id(player_id))


@router.put("/{player_id}")
async def rename_player(
    player_id: str,
    request: PlayerNameUpdateRequest,
    service: PlayerServiceDep,
) -> PlayerResponse:
    """Change a player's name."""
    return PlayerResponse.from_player(await service.rename(player_id, request.name))


@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_player(player_id: str, service: PlayerServiceDep) -> Response:
    """Delete a player."""
    await service.delete(player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
