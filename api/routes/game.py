"""Game API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from api.schemas import GameRequest, GameResponse
from api.storage import get_stores
from config import config
from core.game.service import GameService

router = APIRouter()


async def get_game_service() -> GameService:
    """Build the game service over the configured stores."""
    games, players = await get_stores()
    return GameService(games, players, dealer_stands_on=config.game.dealer_stands_on)


GameServiceDep = Annotated[GameService, Depends(get_game_service)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_game(request: GameRequest, service: GameServiceDep) -> GameResponse:
    """Deal a new game for a registered player."""
    view = await service.create_game(request.player_name)
    return GameResponse.from_view(view)


@router.get("")
async def list_games(service: GameServiceDep) -> list[GameResponse]:
    """List every game."""
    return [GameResponse.from_view(v) for v in await service.list_games()]


@router.get("/{game_id}")
async def get_game(game_id: int, service: GameServiceDep) -> GameResponse:
    """Get one game."""
    return GameResponse.from_view(await service.get_game(game_id))


@router.post("/{game_id}/hit")
async def hit(game_id: int, service: GameServiceDep) -> GameResponse:
    """Player draws a card."""
    return GameResponse.from_view(await service.hit(game_id))


@router.post("/{game_id}/stand")
async def stand(game_id: int, service: GameServiceDep) -> GameResponse:
    """Player stands; the dealer plays and the game is resolved."""
    return GameResponse.from_view(await service.stand(game_id))


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(game_id: int, service: GameServiceDep) -> Response:
    """Delete a game."""
    await service.delete_game(game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
