import os

from fastapi import APIRouter, FastAPI

from .routes import schemas, widget


def create_app(config_obj=None) -> FastAPI:
    from ..config import Config

    if config_obj is None:
        config_file = os.environ.get("DOCKYARD_CONFIG_FILE")
        config_obj = Config.load_from_file(config_file) if config_file else Config.default()

    app = FastAPI(title="Dockyard API")

    app.state.config = config_obj

    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(schemas.router)
    api_router.include_router(widget.router)
    app.include_router(api_router)

    return app
