from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    PROJECT_NAME: str = "FinanceAI Coach Engine"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:8080"
    
    @property
    def allowed_origins_list(self) -> List[str]:
        if isinstance(self.ALLOWED_ORIGINS, list):
            return self.ALLOWED_ORIGINS
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]
    
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    
    # Coaching loop
    TYPING_DELAY_MIN_SECONDS: float = 1.0
    TYPING_DELAY_MAX_SECONDS: float = 3.0  # Upper bound of the simulated "typing" pause
    
    # Localization
    DEFAULT_CURRENCY: str = "USD"
    
    # Gamification
    STARTING_POINTS: int = 50
    STARTING_STREAK: int = 1
    POINTS_PER_LEVEL: int = 250
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
