"""
Centralized application configuration
Downstream service URLs, session/cache lifetimes and demo knobs
"""
import socket
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from the environment and .env"""

    # API Settings
    API_TITLE: str = "PetStoreApp"
    APP_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Pet Store web front end"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Downstream services (empty means "not enabled")
    PETSTOREPETSERVICE_URL: str = ""
    PETSTOREPRODUCTSERVICE_URL: str = ""
    PETSTOREORDERSERVICE_URL: str = ""
    PETSTORE_FUNCTION_URL: str = ""
    PETSTORE_APIM_SUBSCRIPTION_KEY: str = ""
    DOWNSTREAM_TIMEOUT_SECONDS: float = 10.0

    # Live user counter
    SIGNALR_NEGOTIATION_URL: str = ""
    CURRENT_USERS_TTL_SECONDS: int = 300

    # Sessions
    SESSION_SECRET: str = "petstoreapp-dev-session-secret"
    SESSION_TTL_SECONDS: int = 1800

    # ID token verification (HS256). Empty disables sign-in.
    AUTH_SECRET: str = ""

    # Web search
    BING_SEARCH_URL: str = "https://api.bing.microsoft.com/v7.0/search"
    BING_SEARCH_SUBSCRIPTION_KEY: str = ""

    # Demo routes
    SLOWNESS_DELAY_SECONDS: float = 30.0

    CONTAINER_HOST_NAME: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    def get_container_host_name(self) -> str:
        """Configured host name, falling back to the machine host name"""
        return self.CONTAINER_HOST_NAME or socket.gethostname()


settings = Settings()
