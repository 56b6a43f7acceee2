"""
Score state shared by all four games.
"""

from pydantic import BaseModel, ConfigDict, field_validator


class ScoreState(BaseModel):
    """Immutable score, level and combo data for one play session.

    Attributes:
        score: Points earned this session (non-negative)
        level: Current difficulty level (starts at 1)
        combo: Consecutive successful scoring actions (non-negative)
        high_score: Best score known for this game (non-negative)

    Examples:
        >>> state = ScoreState()
        >>> state.score, state.level, state.combo
        (0, 1, 0)
        >>> ScoreState(score=120, high_score=100).is_new_high_score
        True
    """
    score: int = 0
    level: int = 1
    combo: int = 0
    high_score: int = 0

    @field_validator('score', 'combo', 'high_score')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate score values are non-negative."""
        if v < 0:
            raise ValueError(f'Score values must be non-negative, got {v}')
        return v

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: int) -> int:
        """Validate level starts at 1."""
        if v < 1:
            raise ValueError(f'Level must be at least 1, got {v}')
        return v

    @property
    def is_new_high_score(self) -> bool:
        """True when the session score beats the stored best."""
        return self.score > self.high_score

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return (f"ScoreState(score={self.score}, level={self.level}, "
                f"combo={self.combo}, high={self.high_score})")
