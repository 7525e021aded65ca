from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import Settings, get_settings
from .datasources.base import DataSource
from .datasources.github_adapter import GitHubAdapter
from .errors import EmptySelection, SearchFailed
from .schemas import HealthResponse, LanguageOption, LanguagesResponse, RepositoryRecord
from .services.catalog import CatalogLoader, LanguageCatalog
from .services.roulette import RandomRepoService


def create_app(
    settings: Optional[Settings] = None,
    source: Optional[DataSource] = None,
    loader: Optional[CatalogLoader] = None,
) -> FastAPI:
    settings = settings or get_settings()
    github = source or GitHubAdapter(settings)
    catalog = loader.catalog if loader else LanguageCatalog()
    loader = loader or CatalogLoader(catalog, settings=settings)
    roulette = RandomRepoService(github, settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # the catalog is loaded once per process; a failure leaves it empty
        await loader.load()
        try:
            yield
        finally:
            await github.aclose()

    app = FastAPI(title="GitHub Random", version="0.1.0", lifespan=lifespan)
    app.state.catalog = catalog
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc)}

    @app.get("/languages", response_model=LanguagesResponse)
    async def languages():
        return LanguagesResponse(
            loaded=catalog.loaded,
            default=settings.default_language,
            languages=[LanguageOption(identifier=key, label=label) for key, label in catalog.items()],
        )

    @app.get("/search", response_model=List[RepositoryRecord])
    async def search(
        language: Optional[str] = Query(None),
        per_page: Optional[int] = Query(None, ge=1),
    ):
        language = settings.default_language if language is None else language
        if per_page is None:
            per_page = settings.default_per_page
        try:
            return await github.search_repositories(language, per_page=per_page)
        except SearchFailed as exc:
            raise HTTPException(status_code=502, detail=str(exc))

    @app.get("/random", response_model=RepositoryRecord)
    async def random_repository(
        language: Optional[str] = Query(None),
        per_page: Optional[int] = Query(None, ge=1),
    ):
        language = settings.default_language if language is None else language
        try:
            return await roulette.random_repository(language, per_page=per_page)
        except EmptySelection as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        except SearchFailed as exc:
            logger.error(f"[random] search failed for language={language}: {exc}")
            raise HTTPException(status_code=502, detail=str(exc))

    return app


app = create_app()

# run with `python -m github_random.main` or `uvicorn github_random.main:app`
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8020)
