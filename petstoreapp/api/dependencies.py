"""
Request dependencies for the web controller

get_page_context is the pre-request hook: every page route depends on it,
so it runs exactly once per request before the route body.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Request

from petstoreapp.connectors.bing_connector import BingConnector
from petstoreapp.connectors.petstore_connector import PetStoreConnector
from petstoreapp.core.auth import TokenClaims, get_token_claims_optional
from petstoreapp.core.config import Settings
from petstoreapp.core.logging_config import bind_session_id
from petstoreapp.domain.user import SessionUser
from petstoreapp.services.petstore_service import PetStoreService
from petstoreapp.services.search_service import SearchService

logger = logging.getLogger(__name__)


class PageContext:
    """Session user, sign-in claims and the model shared by every view"""

    def __init__(self, session_user: SessionUser, claims: Optional[TokenClaims], model: Dict[str, Any]):
        self.session_user = session_user
        self.claims = claims
        self.model = model

    @property
    def signed_in(self) -> bool:
        return self.claims is not None


def build_forwarded_headers(session_user: SessionUser, settings: Settings) -> Dict[str, str]:
    """Header set passed unchanged to every downstream call"""
    headers = {"session-id": session_user.session_id or ""}
    if settings.PETSTORE_APIM_SUBSCRIPTION_KEY:
        headers["Ocp-Apim-Subscription-Key"] = settings.PETSTORE_APIM_SUBSCRIPTION_KEY
    return headers


async def get_page_context(
    request: Request,
    claims: Optional[TokenClaims] = Depends(get_token_claims_optional)
) -> PageContext:
    state = request.app.state
    environment = state.environment
    current_users = state.current_users

    session_id, session_user = state.session_store.load(request)

    # first request of this session: count it as a new current user
    if session_user.session_id is None:
        session_user.assign_session_id(session_id)
        current_users.put(session_user.session_id, session_user.name)
        environment.send_current_users(len(current_users))

    # refresh TTL
    current_users.put(session_user.session_id, session_user.name)

    bind_session_id(session_user.session_id)

    model: Dict[str, Any] = {}

    if claims is not None:
        if claims.email:
            session_user.email = claims.email
        if claims.name:
            session_user.name = claims.name

        if not session_user.initial_telemetry_recorded:
            session_user.telemetry_client.track_event(
                f"PetStoreApp {session_user.name} logged in, container host: {environment.container_host_name}",
                session_user.get_custom_event_properties(),
            )
            session_user.initial_telemetry_recorded = True

        model["claims"] = claims.raw
        model["user"] = session_user.name
        model["grant_type"] = claims.grant_type

    model.update({
        "userName": session_user.name,
        "containerEnvironment": environment,
        "sessionId": session_user.session_id,
        "appVersion": environment.app_version,
        "cartSize": session_user.cart_count,
        "currentUsersOnSite": len(current_users),
        "signalRNegotiationURL": environment.signalr_negotiation_url,
    })

    return PageContext(session_user, claims, model)


def get_petstore_service(
    request: Request,
    ctx: PageContext = Depends(get_page_context)
) -> PetStoreService:
    state = request.app.state
    connector = PetStoreConnector(
        state.http_client,
        state.environment,
        build_forwarded_headers(ctx.session_user, state.settings),
    )
    return PetStoreService(ctx.session_user, state.environment, connector)


def get_search_service(request: Request) -> SearchService:
    state = request.app.state
    return SearchService(BingConnector(
        state.http_client,
        state.settings.BING_SEARCH_URL,
        state.settings.BING_SEARCH_SUBSCRIPTION_KEY,
    ))
