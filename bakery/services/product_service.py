"""
Product service - catalog reads, upsert and delete.
"""
import logging
from datetime import datetime
from typing import List, Mapping, Optional, Union

from pydantic import ValidationError

from bakery.exceptions import BusinessLogicError, ProductNotFoundError
from bakery.models import Product, ProductPatch

logger = logging.getLogger(__name__)

PRODUCTS_KEY = 'products'
DEFAULT_PRODUCT_NAME = 'Produto'


def load_products(store) -> List[Product]:
    return store.get(PRODUCTS_KEY, [], model=List[Product])


def next_id(records) -> int:
    """Max existing id + 1 (1 for an empty collection)."""
    return max((record.id for record in records), default=0) + 1


def list_products(store, only_active: bool = False) -> List[Product]:
    """List products, optionally only those visible on the storefront."""
    products = load_products(store)
    if only_active:
        return [p for p in products if p.is_active]
    return products


def get_product(store, product_id: int) -> Product:
    for product in load_products(store):
        if product.id == product_id:
            return product
    raise ProductNotFoundError(product_id)


def _as_patch(data: Union[ProductPatch, Mapping]) -> ProductPatch:
    if isinstance(data, ProductPatch):
        return data
    fields = {k: v for k, v in dict(data).items() if k in ProductPatch.model_fields}
    try:
        return ProductPatch.model_validate(fields)
    except ValidationError as e:
        raise BusinessLogicError(f'Dados de produto inválidos: {e.errors()[0]["msg"]}')


def upsert_product(store, data: Union[ProductPatch, Mapping], now: Optional[datetime] = None) -> Product:
    """
    Update the product with the patch's id, or create a new one.

    Existing product: the fields set on the patch are merged and
    ``updated_at`` is refreshed. Otherwise a new product gets id
    max + 1 and defaults for everything the patch leaves unset.

    Raises:
        BusinessLogicError: if the merged record is invalid
    """
    patch = _as_patch(data)
    changes = patch.changes()
    now = now or datetime.now()

    with store.transaction():
        products = load_products(store)

        if patch.id:
            for index, existing in enumerate(products):
                if existing.id != patch.id:
                    continue
                merged = {**existing.model_dump(), **changes, 'updated_at': now}
                try:
                    updated = Product.model_validate(merged)
                except ValidationError as e:
                    raise BusinessLogicError(f'Dados de produto inválidos: {e.errors()[0]["msg"]}')
                products[index] = updated
                store.set(PRODUCTS_KEY, products)
                logger.info(f"Product updated: id={updated.id}, fields={sorted(changes)}")
                return updated

        created = Product(
            id=next_id(products),
            name=changes.get('name') or DEFAULT_PRODUCT_NAME,
            description=changes.get('description') or '',
            price_cents=changes.get('price_cents') or 0,
            cost_cents=changes.get('cost_cents'),
            quantity=changes.get('quantity') or 0,
            expires_at=changes.get('expires_at'),
            category=changes.get('category') or 'other',
            is_active=True if changes.get('is_active') is None else changes['is_active'],
            image_url=changes.get('image_url') or '',
            created_at=now,
            updated_at=now,
        )
        products.append(created)
        store.set(PRODUCTS_KEY, products)

    logger.info(f"Product created: id={created.id}, name={created.name!r}")
    return created


def delete_product(store, product_id: int) -> None:
    """Remove the product if present; unknown ids are ignored."""
    with store.transaction():
        products = load_products(store)
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            return
        store.set(PRODUCTS_KEY, remaining)
    logger.info(f"Product deleted: id={product_id}")
