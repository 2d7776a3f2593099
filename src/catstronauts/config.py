"""
Configuration management for the Catstronauts gateway
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Upstream REST API
    track_api_url: str = "https://odyssey-lift-off-server.herokuapp.com/"
    track_api_timeout: float = 10.0  # seconds, applied to every upstream call

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]
    graphiql: bool = True

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "CATSTRONAUTS_"
        case_sensitive = False


# Global settings instance
settings = Settings()
