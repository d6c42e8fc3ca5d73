# src/api/dependencies.py

"""FastAPI dependencies resolving the per-application services."""

from typing import Annotated

from fastapi import Depends, Request

from src.services.catalog_service import CatalogService
from src.services.image_proxy import ImageProxy


def get_catalog_service(request: Request) -> CatalogService:
    service: CatalogService = request.app.state.catalog_service
    return service


def get_image_proxy(request: Request) -> ImageProxy:
    proxy: ImageProxy = request.app.state.image_proxy
    return proxy


CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]
ImageProxyDep = Annotated[ImageProxy, Depends(get_image_proxy)]
