"""Catalog endpoints — all packages, or the packages of one type."""

from typing import Annotated

from fastapi import APIRouter, Depends

from artifact_catalog.core.dependencies import get_catalog_service
from artifact_catalog.lib.catalog.types import Catalog, PackageType
from artifact_catalog.schemas.catalog import CatalogResponse, PackageResponse
from artifact_catalog.services.catalog_service import CatalogService

catalog_router = APIRouter(prefix="/catalog", tags=["catalog"])


def _to_response(catalog: Catalog) -> CatalogResponse:
    return CatalogResponse(
        total=len(catalog),
        packages=[PackageResponse.from_package(package) for package in catalog],
    )


@catalog_router.get("", response_model=CatalogResponse)
async def get_all_packages(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CatalogResponse:
    """List the packages of every package type.

    Returns 409 while a catalog is being rebuilt and nothing is cached yet.
    """
    return _to_response(await service.get_all_catalogs())


@catalog_router.get("/{package_type}", response_model=CatalogResponse)
async def get_packages(
    package_type: PackageType,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CatalogResponse:
    """List the packages of one package type, sorted by name."""
    return _to_response(await service.get_catalog(package_type))
