from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.recipes import EdamamClient, PreferenceStore, SearchSession, load_credentials, load_settings

from .routers.recipes import router as recipes_router


# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)

DEFAULT_PREFERENCES_FILE = "preferences.json"


def create_app(client: EdamamClient | None = None) -> FastAPI:
    """Build the API. A prepared client can be injected (tests use a mock transport)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        edamam = client or EdamamClient(load_settings())
        app.state.session = SearchSession(
            edamam,
            load_credentials(),
            preferences=PreferenceStore(os.getenv("PREFERENCES_FILE", DEFAULT_PREFERENCES_FILE)),
        )
        try:
            yield
        finally:
            app.state.session = None
            await edamam.aclose()

    app = FastAPI(lifespan=lifespan, title="Recipe search")

    # CORS: allow browser apps hosted on other origins to call this API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(recipes_router)

    @app.get("/health", tags=["ops"], summary="Health check")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
