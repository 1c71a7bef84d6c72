import logging.config
import yaml
import os
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from relayable.relay.config import Config
from relayable.relay.providers.provider import Provider
from relayable.relay.staging import StagingStore
from relayable.rest.errors import register_error_handlers
from relayable.rest.routers import assistants, threads

LOGGER = logging.getLogger(__name__)


def _ensure_log_directories(config: dict):
    """Create the directory of every file handler the logging config names."""
    for handler in config.get("handlers", {}).values():
        filename = handler.get("filename")
        if filename:
            directory = os.path.dirname(os.path.abspath(filename))
            if not os.path.exists(directory):
                os.makedirs(directory)


# Configure logging from YAML file
def setup_logging(config_path: str):
    """Load logging configuration from YAML file"""

    if os.path.exists(config_path):
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
        _ensure_log_directories(config)
        logging.config.dictConfig(config)
    else:
        # Fallback to basic configuration if file not found
        logging.basicConfig(
            level=logging.INFO,
            format="[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
        )
        logging.warning(f"Logging configuration file not found at {config_path}, using default configuration")


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.provider.close()


def create_app(
    config: Optional[Config] = None,
    provider: Optional[Provider] = None,
    staging: Optional[StagingStore] = None
) -> FastAPI:
    """
    Build the gateway app. Collaborators not passed in are created from config;
    config itself is read from the environment when omitted.
    """
    if config is None:
        config = Config.from_env()
        setup_logging(config.log_config_path)

    if provider is None:
        from relayable.relay.providers.openai.OAIAProvider import OAIAProvider
        provider = OAIAProvider.from_config(config)

    if staging is None:
        staging = StagingStore(config.upload_path, config.max_file_size)
    staging.ensure_directory()

    app = FastAPI(
        title="Relay AI REST API",
        description="REST gateway for assistants, threads, messages and file attachments",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.config = config
    app.state.provider = provider
    app.state.staging = staging

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials="*" not in config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    LOGGER.info(f"CORSMiddleware added with origins: {config.cors_origins}")

    app.include_router(assistants.router)
    app.include_router(threads.router)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run():
    import uvicorn

    config = Config.from_env()
    setup_logging(config.log_config_path)
    app = create_app(config)
    LOGGER.info(f"Server running on port {config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


__all__ = ["create_app", "setup_logging", "run"]
