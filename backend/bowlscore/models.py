from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from .db import Base


class Game(Base):
    __tablename__ = "game"
    id = Column(String, primary_key=True)
    total_score = Column(Integer, nullable=False, default=0)
    strikes = Column(Integer, nullable=False, default=0)
    spares = Column(Integer, nullable=False, default=0)
    is_complete = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class GameFrame(Base):
    __tablename__ = "game_frame"
    id = Column(String, primary_key=True)
    game_id = Column(String, ForeignKey("game.id"), nullable=False)
    frame_number = Column(Integer, nullable=False)
    throws = Column(JSON, nullable=False, default=list)  # e.g. [10] or [7, 3]
    cumulative_score = Column(Integer, nullable=False, default=0)
    is_complete = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("game_id", "frame_number", name="uq_game_frame_number"),
    )
