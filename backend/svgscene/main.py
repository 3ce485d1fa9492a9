"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from svgscene.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.svgscene_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="svgscene",
        description="SVG document interpreter: resolved geometry and paint for rendering back ends",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all element handler modules to trigger registration
    _register_elements()

    from svgscene.api.router import api_router

    app.include_router(api_router)

    return app


def _register_elements() -> None:
    """Import the handler modules so @element decorators fire."""
    from svgscene.engine.registry import load_element_handlers

    registry = load_element_handlers()
    logging.getLogger(__name__).debug("Loaded %d element handlers", registry.count)


app = create_app()
