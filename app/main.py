"""Entry point for the FastAPI catalog and recommendation service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, settings
from .database import Database
from .errors import TitleNotFoundError, UnrecognizedGenreError
from .services.catalog import CatalogService
from .services.recommendations import RecommendationService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app: FastAPI


async def open_database(config: Settings) -> Database:
    """Connect to the catalog database.

    Tables are only created when ``DATABASE_CREATE_TABLES`` is enabled; the
    service otherwise reads whatever schema the catalog exports provide.
    """

    database = Database(config.database_url)
    if config.database_create_tables:
        logger.warning("Creating missing catalog tables in %s", config.database_url)
        await database.create_all()
    return database


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    database = await open_database(settings)

    catalog_service = CatalogService(settings, database.session_factory)
    recommendation_service = RecommendationService(
        settings, catalog_service, database.session_factory
    )

    fastapi_app.state.database = database
    fastapi_app.state.catalog_service = catalog_service
    fastapi_app.state.recommendation_service = recommendation_service
    logger.info("Serving catalog from %s", settings.database_url)

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await database.dispose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Title catalog search and precomputed recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_catalog_service(app: FastAPI) -> CatalogService:
    service = getattr(app.state, "catalog_service", None)
    if not isinstance(service, CatalogService):
        raise RuntimeError("Catalog service not initialised")
    return service


def get_recommendation_service(app: FastAPI) -> RecommendationService:
    service = getattr(app.state, "recommendation_service", None)
    if not isinstance(service, RecommendationService):
        raise RuntimeError("Recommendation service not initialised")
    return service


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/api/catalog")
    async def list_catalog(
        search: str | None = None,
        genre: str | None = None,
        page: int = Query(default=1, ge=1),
        page_size: int | None = Query(
            default=None, alias="pageSize", ge=1, le=settings.max_page_size
        ),
        kids_mode: bool = Query(default=False, alias="kidsMode"),
    ) -> dict[str, Any]:
        service = get_catalog_service(fastapi_app)
        try:
            result = await service.query(
                search=search,
                genre=genre,
                page=page,
                page_size=page_size,
                kids_mode=kids_mode,
            )
        except UnrecognizedGenreError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return result.model_dump(mode="json", by_alias=True)

    @fastapi_app.get("/api/catalog/genres")
    async def list_genres() -> list[str]:
        service = get_catalog_service(fastapi_app)
        return await service.list_genres()

    @fastapi_app.get("/api/catalog/{show_id}")
    async def get_title(
        show_id: str,
        kids_mode: bool = Query(default=False, alias="kidsMode"),
    ) -> dict[str, Any]:
        service = get_catalog_service(fastapi_app)
        try:
            item = await service.get_by_id(show_id, kids_mode=kids_mode)
        except TitleNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return item.model_dump(mode="json", by_alias=True)

    @fastapi_app.get("/api/catalog/{show_id}/neighbors")
    async def get_neighbors(
        show_id: str,
        kids_mode: bool = Query(default=False, alias="kidsMode"),
    ) -> list[dict[str, Any]]:
        service = get_recommendation_service(fastapi_app)
        try:
            items = await service.neighbors_for(show_id, kids_mode=kids_mode)
        except TitleNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return [item.model_dump(mode="json", by_alias=True) for item in items]

    @fastapi_app.get("/api/users/{external_user_id}/recommendations")
    async def get_user_recommendations(
        external_user_id: str,
        kids_mode: bool = Query(default=False, alias="kidsMode"),
    ) -> dict[str, Any]:
        service = get_recommendation_service(fastapi_app)
        result = await service.recommendations_for_user(
            external_user_id, kids_mode=kids_mode
        )
        return result.model_dump(mode="json", by_alias=True)


app = create_app()
