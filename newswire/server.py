"""FastAPI application exposing the news client over HTTP."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .client import NewsClient
from .errors import ArticleNotFoundError, NewsError, ValidationError, coerce_error
from .schemas import CacheClearResponse, EnumsResponse, ErrorResponse, ProvidersResponse

LOGGER = logging.getLogger(__name__)


def _given(**params: Optional[str]) -> Dict[str, str]:
    return {key: value for key, value in params.items() if value}


def create_app(client: NewsClient, cors_origins: Optional[List[str]] = None) -> FastAPI:
    app = FastAPI(title="Newswire", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NewsError)
    async def _news_error_handler(request: Request, exc: NewsError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled error on %s", request.url.path)
        error = coerce_error(exc)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    def get_client() -> NewsClient:
        return client

    @app.get("/healthz", summary="Health check")
    async def health_check() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/news/search", responses={400: {"model": ErrorResponse}})
    async def search(
        q: Optional[str] = Query(None, description="Search query"),
        page: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        country: Optional[str] = Query(None),
        lang: Optional[str] = Query(None),
        sort_by: Optional[str] = Query(None, alias="sortBy"),
        search_in: Optional[str] = Query(None, alias="searchIn"),
        provider: Optional[str] = Query(None),
        from_date: Optional[str] = Query(None, alias="from"),
        to_date: Optional[str] = Query(None, alias="to"),
        service: NewsClient = Depends(get_client),
    ) -> Dict[str, Any]:
        if not q or not q.strip():
            raise ValidationError("Search query (q) is required")
        options = _given(
            page=page,
            limit=limit,
            country=country,
            lang=lang,
            sortBy=sort_by,
            searchIn=search_in,
            provider=provider,
            **{"from": from_date, "to": to_date},
        )
        result = await service.search_news(
            q.strip(),
            provider=provider,
            page=page or 1,
            limit=limit or 10,
            country=country,
            lang=lang,
            sort_by=sort_by,
            search_in=search_in,
            from_date=from_date,
            to_date=to_date,
        )
        return {"success": True, "query": q.strip(), "options": options, **result.to_dict()}

    @app.get("/api/news/headlines")
    async def headlines(
        category: Optional[str] = Query(None),
        page: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        country: Optional[str] = Query(None),
        lang: Optional[str] = Query(None),
        provider: Optional[str] = Query(None),
        service: NewsClient = Depends(get_client),
    ) -> Dict[str, Any]:
        options = _given(
            category=category,
            page=page,
            limit=limit,
            country=country,
            lang=lang,
            provider=provider,
        )
        result = await service.get_top_headlines(
            provider=provider,
            page=page or 1,
            limit=limit or 10,
            category=category,
            country=country,
            lang=lang,
        )
        return {"success": True, "options": options, **result.to_dict()}

    @app.get("/api/news/providers", response_model=ProvidersResponse, response_model_by_alias=True)
    async def providers(service: NewsClient = Depends(get_client)) -> ProvidersResponse:
        return ProvidersResponse(
            default_provider=service.default_provider,
            available_providers=service.available_providers(),
        )

    @app.get("/api/news/enums", response_model=EnumsResponse, response_model_by_alias=True)
    async def enums() -> EnumsResponse:
        return EnumsResponse()

    @app.get("/api/news/articles/{article_id}")
    async def article(article_id: str, service: NewsClient = Depends(get_client)) -> Dict[str, Any]:
        found = service.find_article(article_id)
        if found is None:
            raise ArticleNotFoundError(article_id)
        return {"success": True, "article": found.to_dict()}

    @app.delete("/api/news/cache", response_model=CacheClearResponse)
    async def clear_cache(service: NewsClient = Depends(get_client)) -> CacheClearResponse:
        return CacheClearResponse(cleared=service.clear_cache())

    return app


__all__ = ["create_app"]
