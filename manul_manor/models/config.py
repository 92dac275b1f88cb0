"""Engine configuration — every rule constant in one place."""

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Configuration for the pet engine and its scheduler."""

    decay_interval_seconds: int = 1800
    save_interval_seconds: int = 300

    hunger_decay_per_hour: float = 0.01
    hygiene_decay_per_hour: float = 0.008
    happiness_decay_per_hour: float = 0.006

    feed_xp: int = 5
    clean_xp: int = 5
    play_xp: int = 10
    play_happiness_gain: float = 0.3
    placement_happiness_gain: float = 0.05

    xp_per_level: int = 100
    level_up_coins_per_level: int = 50

    quiz_weekday: int = Field(ge=0, le=6, default=0)   # date.weekday(), Monday == 0
    questions_per_quiz: int = Field(ge=1, default=3)
    quiz_base_coins: int = 50
    quiz_coins_per_correct: int = 15
    quiz_base_xp: int = 25
    quiz_xp_per_correct: int = 10
    allow_answer_resubmission: bool = False

    feedback_display_seconds: float = 2.5

    starting_coins: int = 100
    starting_hunger: float = Field(ge=0, le=1, default=0.8)
    starting_hygiene: float = Field(ge=0, le=1, default=1.0)
    starting_happiness: float = Field(ge=0, le=1, default=0.9)
