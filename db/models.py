"""
Database models for the daily Wordle game.
"""
from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from flask_login import UserMixin
from datetime import datetime

Base = declarative_base()


class User(UserMixin, Base):
    """User model for storing player accounts."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    game_states = relationship("GameState", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"


class Puzzle(Base):
    """Daily puzzle, one row per date. Never updated once stored."""
    __tablename__ = 'wordles'

    id = Column(Integer, primary_key=True)
    date = Column(String(10), unique=True, nullable=False, index=True)  # YYYY-MM-DD
    solution = Column(String(5), nullable=False)
    puzzle_id = Column(Integer, nullable=False)
    print_date = Column(String(10), nullable=False)
    days_since_launch = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Puzzle(date='{self.date}', puzzle_id={self.puzzle_id})>"


class GameState(Base):
    """A user's progress on one date's puzzle."""
    __tablename__ = 'game_states'
    __table_args__ = (UniqueConstraint('user_id', 'date', name='uq_game_state_user_date'),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    date = Column(String(10), nullable=False)
    # [{"word": "CRANE", "feedback": ["absent", "correct", ...]}, ...]
    guesses = Column(JSON, nullable=False, default=list)
    is_game_over = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="game_states")

    def __repr__(self):
        return f"<GameState(user_id={self.user_id}, date='{self.date}', guesses={len(self.guesses or [])}, is_game_over={self.is_game_over})>"
