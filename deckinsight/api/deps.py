"""
Request dependencies.

Collaborators and the session registry live on `app.state` (set up in the
application lifespan). Tests replace them through `app.dependency_overrides`.
"""

from fastapi import Request

from deckinsight.scrapers.moxfield import MoxfieldClient
from deckinsight.scrapers.mtggoldfish import MtgGoldfishClient
from deckinsight.services.sessions import SessionRegistry


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_goldfish_client(request: Request) -> MtgGoldfishClient:
    return request.app.state.goldfish


def get_moxfield_client(request: Request) -> MoxfieldClient:
    return request.app.state.moxfield
