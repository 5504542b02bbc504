# backend/bowlscore/routers/games.py
import logging
import uuid
from typing import Sequence

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..exceptions import (
    FrameNotFound,
    GameAlreadyComplete,
    GameNotFound,
    ProblemDetail,
    UnscorableGame,
    http_problem,
)
from ..models import Game, GameFrame
from ..schemas import FrameOut, FrameSubmit, GameOut
from ..scoring import bowling as bowling_engine
from ..services.validation import ValidationError, ensure_valid_throws
from ..time_utils import coerce_utc

logger = logging.getLogger(__name__)

# Resource-only prefix; versioning is added in main.py
router = APIRouter(
    prefix="/games", tags=["games"], responses={404: {"model": ProblemDetail}}
)


async def _get_game(session: AsyncSession, game_id: str) -> Game:
    game = await session.get(Game, game_id)
    if not game:
        raise GameNotFound(game_id)
    return game


async def _load_frames(session: AsyncSession, game_id: str) -> Sequence[GameFrame]:
    return (
        await session.execute(
            select(GameFrame)
            .where(GameFrame.game_id == game_id)
            .order_by(GameFrame.frame_number)
        )
    ).scalars().all()


def _to_game_out(game: Game, rows: Sequence[GameFrame]) -> GameOut:
    return GameOut(
        id=game.id,
        totalScore=game.total_score,
        strikes=game.strikes,
        spares=game.spares,
        isComplete=game.is_complete,
        createdAt=coerce_utc(game.created_at),
        frames=[
            FrameOut(
                frameNumber=row.frame_number,
                throws=list(row.throws or []),
                marks=bowling_engine.frame_marks(row.frame_number, row.throws or []),
                cumulativeScore=row.cumulative_score,
                isComplete=row.is_complete,
            )
            for row in rows
        ],
    )


@router.post("", response_model=GameOut, status_code=201)
async def create_game(session: AsyncSession = Depends(get_session)) -> GameOut:
    gid = uuid.uuid4().hex
    game = Game(id=gid, total_score=0, strikes=0, spares=0, is_complete=False)
    session.add(game)
    await session.flush()

    rows = [
        GameFrame(
            id=uuid.uuid4().hex,
            game_id=gid,
            frame_number=frame.frame_number,
            throws=list(frame.throws),
            cumulative_score=0,
            is_complete=False,
        )
        for frame in bowling_engine.empty_game()
    ]
    session.add_all(rows)
    await session.commit()
    # created_at is filled in by the database
    await session.refresh(game)
    logger.info("Created game %s", gid)
    return _to_game_out(game, rows)


@router.get("/{game_id}", response_model=GameOut)
async def get_game(game_id: str, session: AsyncSession = Depends(get_session)) -> GameOut:
    game = await _get_game(session, game_id)
    rows = await _load_frames(session, game_id)
    return _to_game_out(game, rows)


# POST /api/v0/games/{game_id}/frames
@router.post("/{game_id}/frames", response_model=GameOut)
async def submit_frame(
    game_id: str,
    body: FrameSubmit,
    session: AsyncSession = Depends(get_session),
) -> GameOut:
    game = await _get_game(session, game_id)
    if game.is_complete:
        raise GameAlreadyComplete(game_id)

    try:
        ensure_valid_throws(body.throws, body.frameNumber)
    except ValidationError as exc:
        raise http_problem(
            status_code=400,
            detail=exc.detail,
            code="invalid_throws",
        )

    rows = await _load_frames(session, game_id)
    by_number = {row.frame_number: row for row in rows}
    row = by_number.get(body.frameNumber)
    if row is None:
        raise FrameNotFound(game_id, body.frameNumber)

    row.throws = list(body.throws)
    row.is_complete = bowling_engine.is_frame_complete(body.throws, body.frameNumber)

    try:
        scored = bowling_engine.calculate_game_score(
            bowling_engine.Frame(frame_number=r.frame_number, throws=r.throws or ())
            for r in rows
        )
    except bowling_engine.InvalidFrameData as exc:
        await session.rollback()
        logger.warning("Refusing to rescore game %s: %s", game_id, exc)
        raise UnscorableGame(str(exc)) from exc

    for frame in scored:
        by_number[frame.frame_number].cumulative_score = frame.cumulative_score

    stats = bowling_engine.get_frame_stats(scored)
    game_complete = bowling_engine.is_game_complete(scored)
    game.is_complete = game_complete
    game.total_score = scored[-1].cumulative_score if game_complete else 0
    game.strikes = stats.strikes
    game.spares = stats.spares
    await session.commit()

    logger.info(
        "Recorded frame %d of game %s (complete=%s)",
        body.frameNumber,
        game_id,
        game_complete,
    )
    return _to_game_out(game, rows)
