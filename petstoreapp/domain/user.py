"""
Session User Model

Per-browser-session state, kept server side for the life of the session.
The controller passes it explicitly into the services for each request.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from petstoreapp.core.telemetry import TelemetryClient
from petstoreapp.domain.pet import Pet
from petstoreapp.domain.product import Product

GUEST_NAME = "Guest"


class SessionUser(BaseModel):
    """
    Session user

    Fields:
        session_id: Assigned on first contact, doubles as the order id
        name: Display name ("Guest" until signed in)
        email: Email from the ID token claims
        cart_count: Items in the open order
        pets: Unfiltered pet list from the last pet service call
        products: Unfiltered product list from the last product service call
        telemetry_client: Telemetry handle for this session
        initial_telemetry_recorded: Login event already sent
    """
    session_id: Optional[str] = None
    name: str = GUEST_NAME
    email: Optional[str] = None
    cart_count: int = 0
    pets: Optional[List[Pet]] = None
    products: Optional[List[Product]] = None
    telemetry_client: TelemetryClient = Field(default_factory=TelemetryClient)
    initial_telemetry_recorded: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def get_custom_event_properties(self) -> Dict[str, str]:
        return {
            "session_Id": self.session_id or "",
            "name": self.name,
        }

    def assign_session_id(self, session_id: str) -> None:
        self.session_id = session_id
        self.telemetry_client.context_properties["session_Id"] = session_id
