"""Catalog service layer.

Views should call these functions instead of manipulating Product
directly. Ownership is enforced here so every entry point gets it.
"""

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal

from django.core.paginator import Paginator
from django.db import DatabaseError, transaction

from shopfront.core.conf import get_page_size
from shopfront.core.exceptions import NotFoundError, PersistenceError
from shopfront.core.permissions import check_owner

from .models import Product

logger = logging.getLogger(__name__)


@dataclass
class CatalogPage:
    """One page of the product listing."""

    products: list
    current_page: int
    has_next_page: bool
    has_previous_page: bool
    next_page: int
    previous_page: int
    last_page: int
    total_products: int


def paginate_products(queryset, page=1, page_size=None) -> CatalogPage:
    """Slice ``queryset`` into a CatalogPage.

    Non-numeric or out-of-range page numbers clamp to the nearest valid page.
    """
    paginator = Paginator(queryset, page_size or get_page_size())
    page_obj = paginator.get_page(page)
    current = page_obj.number
    return CatalogPage(
        products=list(page_obj.object_list),
        current_page=current,
        has_next_page=page_obj.has_next(),
        has_previous_page=page_obj.has_previous(),
        next_page=current + 1,
        previous_page=current - 1,
        last_page=paginator.num_pages,
        total_products=paginator.count,
    )


def list_products(page=1, owner=None) -> CatalogPage:
    """List products newest first, optionally only those owned by ``owner``."""
    queryset = Product.objects.all()
    if owner is not None:
        queryset = queryset.filter(owner=owner)
    try:
        return paginate_products(queryset, page)
    except DatabaseError as e:
        raise PersistenceError("Could not load products.") from e


def get_product(product_id) -> Product:
    """Fetch a product by id.

    Raises:
        NotFoundError: No product with that id, or the id is malformed.
    """
    try:
        product_uuid = uuid.UUID(str(product_id))
    except ValueError:
        raise NotFoundError("Product not found.", product_id=str(product_id))

    try:
        return Product.objects.get(pk=product_uuid)
    except Product.DoesNotExist:
        raise NotFoundError("Product not found.", product_id=str(product_id))
    except DatabaseError as e:
        raise PersistenceError("Could not load product.") from e


def create_product(owner, title: str, price: Decimal, description: str, image) -> Product:
    """Create a product owned by ``owner``."""
    try:
        product = Product.objects.create(
            owner=owner,
            title=title,
            price=price,
            description=description,
            image=image,
        )
    except DatabaseError as e:
        raise PersistenceError("Could not save product.") from e

    logger.info("Product %s created by %s", product.pk, owner.pk)
    return product


def update_product(product: Product, user, title: str, price: Decimal, description: str, image=None) -> Product:
    """Update a product's fields, replacing its image when one is given.

    Raises:
        AuthorizationError: ``user`` does not own the product.
    """
    check_owner(product.owner_id, user, "product")

    old_image_name = None
    product.title = title
    product.price = price
    product.description = description
    if image:
        old_image_name = product.image.name
        product.image = image

    try:
        product.save()
    except DatabaseError as e:
        raise PersistenceError("Could not save product.") from e

    if old_image_name:
        delete_image(old_image_name, product.image.storage)

    logger.info("Product %s updated by %s", product.pk, user.pk)
    return product


def delete_product(product_id, user):
    """Delete a product and its image file.

    Raises:
        NotFoundError: No such product.
        AuthorizationError: ``user`` does not own the product.
    """
    product = get_product(product_id)
    check_owner(product.owner_id, user, "product")

    image_name = product.image.name
    storage = product.image.storage
    try:
        with transaction.atomic():
            product.delete()
    except DatabaseError as e:
        raise PersistenceError("Deleting product failed.") from e

    if image_name:
        delete_image(image_name, storage)

    logger.info("Product %s deleted by %s", product_id, user.pk)


def delete_image(name: str, storage):
    """Remove an uploaded image, logging rather than failing if it is gone."""
    try:
        storage.delete(name)
    except OSError:
        logger.exception("Could not delete image %s", name)
