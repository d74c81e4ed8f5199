# quickcourt/config.py

from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./quickcourt.db"

    # JWT
    SECRET_KEY: str = "quickcourt-secret-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Logging
    LOG_LEVEL: str = "INFO"

    # Availability grid: first slot starts at SLOT_DAY_START, last one ends at SLOT_DAY_END
    SLOT_DAY_START: int = 6
    SLOT_DAY_END: int = 23

    # CORS
    FRONTEND_URLS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def allowed_origins(self) -> List[str]:
        urls = self.FRONTEND_URLS.split(",")
        all_urls = []
        for url in urls:
            url = url.strip()
            if url:
                all_urls.append(url)
                # Same host over HTTPS
                if url.startswith("http://"):
                    all_urls.append(url.replace("http://", "https://"))
        return all_urls

    class Config:
        env_file = ".env"

settings = Settings()
