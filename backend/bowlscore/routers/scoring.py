from fastapi import APIRouter

from ..exceptions import ProblemDetail, UnscorableGame
from ..schemas import (
    FrameOut,
    FrameStatsOut,
    NextThrowIn,
    NextThrowOut,
    ScoreOut,
    ScoreRequest,
    ThrowValidationIn,
    ThrowValidationOut,
)
from ..scoring import bowling as bowling_engine
from ..services.validation import validate_next_throw, validate_throws

# Stateless helpers; nothing here touches the database
router = APIRouter(
    prefix="/bowling", tags=["bowling"], responses={422: {"model": ProblemDetail}}
)


def to_frame_out(frame: bowling_engine.Frame) -> FrameOut:
    return FrameOut(
        frameNumber=frame.frame_number,
        throws=list(frame.throws),
        marks=bowling_engine.frame_marks(frame.frame_number, frame.throws),
        cumulativeScore=frame.cumulative_score,
        isComplete=bowling_engine.is_frame_complete(frame.throws, frame.frame_number),
    )


# POST /api/v0/bowling/score
@router.post("/score", response_model=ScoreOut)
async def score_frames(body: ScoreRequest) -> ScoreOut:
    frames = [
        bowling_engine.Frame(frame_number=f.frameNumber, throws=f.throws)
        for f in body.frames
    ]
    try:
        result = bowling_engine.summary(frames)
    except bowling_engine.InvalidFrameData as exc:
        raise UnscorableGame(str(exc)) from exc

    return ScoreOut(
        frames=[to_frame_out(f) for f in result["frames"]],
        scores=result["scores"],
        total=result["total"],
        isComplete=result["isComplete"],
        stats=FrameStatsOut(**result["stats"]),
    )


# POST /api/v0/bowling/validate
@router.post("/validate", response_model=ThrowValidationOut)
async def validate_frame(body: ThrowValidationIn) -> ThrowValidationOut:
    result = validate_throws(body.throws, body.frameNumber)
    return ThrowValidationOut(valid=result.valid, error=result.error)


# POST /api/v0/bowling/next-throw
@router.post("/next-throw", response_model=NextThrowOut)
async def check_next_throw(body: NextThrowIn) -> NextThrowOut:
    error = validate_next_throw(body.frameNumber, body.throws, body.pins)
    return NextThrowOut(allowed=error is None, error=error)
