from fastapi import Request

from relayable.relay.config import Config
from relayable.relay.providers.provider import Provider
from relayable.relay.staging import StagingStore


def get_provider(request: Request) -> Provider:
    """FastAPI dependency returning the provider the app was built with."""
    return request.app.state.provider


def get_staging_store(request: Request) -> StagingStore:
    return request.app.state.staging


def get_config(request: Request) -> Config:
    return request.app.state.config
