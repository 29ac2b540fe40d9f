"""
Container Environment

Static deployment configuration, built once at startup from Settings.
"""
import logging

from pydantic import BaseModel, ConfigDict

from petstoreapp.core.config import Settings

logger = logging.getLogger(__name__)

CURRENT_USERS_HUB = "currentUsers"


class ContainerEnvironment(BaseModel):
    """Read-only view of where this container runs and what it talks to"""
    container_host_name: str
    app_version: str
    pet_service_url: str = ""
    product_service_url: str = ""
    order_service_url: str = ""
    function_url: str = ""
    signalr_negotiation_url: str = ""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContainerEnvironment":
        return cls(
            container_host_name=settings.get_container_host_name(),
            app_version=settings.APP_VERSION,
            pet_service_url=settings.PETSTOREPETSERVICE_URL,
            product_service_url=settings.PETSTOREPRODUCTSERVICE_URL,
            order_service_url=settings.PETSTOREORDERSERVICE_URL,
            function_url=settings.PETSTORE_FUNCTION_URL,
            signalr_negotiation_url=settings.SIGNALR_NEGOTIATION_URL,
        )

    def send_current_users(self, count: int) -> None:
        """Publish the live user count to the current-users hub"""
        logger.info(f"{CURRENT_USERS_HUB}: {count} users on {self.container_host_name}")
