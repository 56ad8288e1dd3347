"""Game session configuration via environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings

from shiritori.logic.types import GameRules


class SessionSettings(BaseSettings):
    model_config = {"env_prefix": "SHIRITORI_"}

    log_dir: str = Field(default="backend/logs/shiritori", min_length=1)
    computer_first_turn_delay_seconds: float = Field(default=2.0, ge=0)
    computer_turn_delay_seconds: float = Field(default=1.0, ge=0)
    default_time_limit_seconds: int = Field(default=60, ge=0)  # 0 disables the turn timer

    def default_rules(self) -> GameRules:
        """Game rules using the configured time limit and library defaults for the rest."""
        return GameRules(time_limit_seconds=self.default_time_limit_seconds)
