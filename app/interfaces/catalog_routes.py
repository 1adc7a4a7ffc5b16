from fastapi import APIRouter, Depends

from app.application.catalog import Catalog
from app.core.errors import NotFoundError
from app.domain.schemas import (
    BannerIn, BannerUpdate, CategoryIn, CategoryUpdate, ProductIn, ProductUpdate,
)
from app.interfaces.dependencies import get_catalog

router = APIRouter(prefix="/api", tags=["Catalog"])


def _found(record, label: str) -> dict:
    if record is None:
        raise NotFoundError(f"{label} not found")
    return record.to_dict()


# ---------------------------------------------------------
# CATEGORIES
# ---------------------------------------------------------
@router.get("/categories")
def list_categories(catalog: Catalog = Depends(get_catalog)):
    return [c.to_dict() for c in catalog.categories.list()]


@router.post("/categories", status_code=201)
def create_category(payload: CategoryIn, catalog: Catalog = Depends(get_catalog)):
    return catalog.categories.create(payload.model_dump()).to_dict()


@router.put("/categories/{category_id}")
def update_category(category_id: str, payload: CategoryUpdate, catalog: Catalog = Depends(get_catalog)):
    return _found(catalog.categories.update(category_id, payload.model_dump(exclude_unset=True)), "Category")


@router.delete("/categories/{category_id}")
def delete_category(category_id: str, catalog: Catalog = Depends(get_catalog)):
    if not catalog.categories.delete(category_id):
        raise NotFoundError("Category not found")
    return {"message": "Category deleted"}


# ---------------------------------------------------------
# PRODUCTS
# ---------------------------------------------------------
@router.get("/products")
def list_products(catalog: Catalog = Depends(get_catalog)):
    return [p.to_dict() for p in catalog.products.list()]


@router.post("/products/seed")
def seed_products(catalog: Catalog = Depends(get_catalog)):
    return catalog.seed()


@router.post("/products", status_code=201)
def create_product(payload: ProductIn, catalog: Catalog = Depends(get_catalog)):
    return catalog.products.create(payload.model_dump()).to_dict()


@router.get("/products/{product_id}")
def get_product(product_id: str, catalog: Catalog = Depends(get_catalog)):
    return _found(catalog.products.get(product_id), "Product")


@router.put("/products/{product_id}")
def update_product(product_id: str, payload: ProductUpdate, catalog: Catalog = Depends(get_catalog)):
    return _found(catalog.products.update(product_id, payload.model_dump(exclude_unset=True)), "Product")


@router.delete("/products/{product_id}")
def delete_product(product_id: str, catalog: Catalog = Depends(get_catalog)):
    if not catalog.products.delete(product_id):
        raise NotFoundError("Product not found")
    return {"message": "Product deleted"}


# ---------------------------------------------------------
# BANNERS
# ---------------------------------------------------------
@router.get("/banners")
def list_banners(catalog: Catalog = Depends(get_catalog)):
    return [b.to_dict() for b in catalog.banners.list()]


@router.post("/banners", status_code=201)
def create_banner(payload: BannerIn, catalog: Catalog = Depends(get_catalog)):
    return catalog.banners.create(payload.model_dump()).to_dict()


@router.put("/banners/{banner_id}")
def update_banner(banner_id: str, payload: BannerUpdate, catalog: Catalog = Depends(get_catalog)):
    return _found(catalog.banners.update(banner_id, payload.model_dump(exclude_unset=True)), "Banner")


@router.delete("/banners/{banner_id}")
def delete_banner(banner_id: str, catalog: Catalog = Depends(get_catalog)):
    if not catalog.banners.delete(banner_id):
        raise NotFoundError("Banner not found")
    return {"message": "Banner deleted"}
