"""Pydantic schemas for response payloads of the discovery endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import NewsCategory, ProviderName, SearchIn, SortBy, values


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ProvidersResponse(_CamelModel):
    success: bool = True
    default_provider: Optional[str] = Field(None, alias="defaultProvider")
    available_providers: List[str] = Field(default_factory=list, alias="availableProviders")


class EnumValues(_CamelModel):
    sort_by: List[str] = Field(default_factory=lambda: values(SortBy), alias="sortBy")
    search_in: List[str] = Field(default_factory=lambda: values(SearchIn), alias="searchIn")
    categories: List[str] = Field(default_factory=lambda: values(NewsCategory))
    providers: List[str] = Field(default_factory=lambda: values(ProviderName))


class EnumsResponse(BaseModel):
    success: bool = True
    enums: EnumValues = Field(default_factory=EnumValues)


class CacheClearResponse(BaseModel):
    success: bool = True
    cleared: int = Field(..., description="Number of cached queries dropped")


class ErrorResponse(_CamelModel):
    success: bool = False
    error: str
    type: str
    status_code: int = Field(..., alias="statusCode")


__all__ = [
    "CacheClearResponse",
    "EnumValues",
    "EnumsResponse",
    "ErrorResponse",
    "ProvidersResponse",
]
