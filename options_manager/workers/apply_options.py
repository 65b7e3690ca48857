"""RQ worker job: create catalog variants from a shop's saved options."""
import itertools
import logging

from flask import current_app, has_app_context
from redis.exceptions import LockError

from options_manager import create_app, extensions
from options_manager.extensions import db
from options_manager.models.product_variant import ProductVariant
from options_manager.services import option_service, shopify_service

logger = logging.getLogger(__name__)

_worker_app = None


def _get_app():
    """Return an app instance for worker execution.

    Reuse the current app when already inside an app context (tests/CLI),
    otherwise lazily create the worker app once.
    """
    global _worker_app
    if has_app_context():
        return current_app._get_current_object()
    if _worker_app is None:
        _worker_app = create_app()
    return _worker_app


def _value_axes(options):
    """Active values per option, options in display order, empty axes dropped."""
    axes = []
    for option in sorted(options, key=lambda o: (o.position, o.name)):
        active = [v for v in option.values if v.is_active]
        if active:
            axes.append((option, active))
    return axes


def apply_options_to_products(shop, product_handles, option_ids):
    """Create one variant per combination of active values on each product.

    Idempotency: combinations already recorded for a product are skipped,
    so a retried job only creates what is missing.
    Distributed lock: one worker per (shop, product handle).

    Returns ``{handle: created_count}``; ``None`` marks a skipped product.
    """
    app = _get_app()
    with app.app_context():
        options = option_service.get_options_by_ids(option_ids, shop)
        axes = _value_axes(options)
        if not axes:
            logger.info("No active option values to apply for %s", shop)
            return {}

        combinations = list(itertools.product(*(values for _, values in axes)))
        limit = app.config["MAX_VARIANTS_PER_PRODUCT"]
        summary = {}

        for handle in product_handles:
            if len(combinations) > limit:
                logger.error(
                    "Skipping %s: %d combinations exceed the %d variant limit",
                    handle, len(combinations), limit,
                )
                summary[handle] = None
                continue

            lock = None
            if extensions.redis_client:
                lock = extensions.redis_client.lock(
                    f"apply_options:{shop}:{handle}", timeout=600
                )
                if not lock.acquire(blocking=False):
                    logger.info("Lock held for %s on %s, skipping", handle, shop)
                    summary[handle] = None
                    continue

            try:
                summary[handle] = _apply_to_product(shop, handle, axes, combinations)
            finally:
                if lock is not None:
                    try:
                        lock.release()
                    except LockError:
                        logger.warning("Lock for %s expired before release", handle)

        return summary


def _apply_to_product(shop, handle, axes, combinations):
    try:
        product_id = shopify_service.get_product_id(shop, handle)
    except (LookupError, RuntimeError):
        logger.exception("Error fetching product %s for %s", handle, shop)
        return None

    existing = {
        v.combination_key
        for v in ProductVariant.query.filter_by(shop=shop, product_id=product_id)
    }
    options = [option for option, _ in axes]
    created = 0

    for combination in combinations:
        key = ProductVariant.combination_key_for(combination)
        if key in existing:
            continue

        title = " / ".join(v.value for v in combination)
        try:
            payload = shopify_service.product_variant_create(
                shop,
                {
                    "productId": product_id,
                    "title": title,
                    "price": "0.00",
                    "inventoryQuantity": 0,
                    "options": [v.value for v in combination],
                },
            )
        except RuntimeError:
            logger.exception("Variant %r failed for %s", title, handle)
            raise  # let RQ handle retry

        catalog_variant = payload.get("productVariant") or {}
        db.session.add(
            ProductVariant(
                product_id=product_id,
                catalog_variant_id=catalog_variant.get("id"),
                sku=catalog_variant.get("sku"),
                title=title,
                shop=shop,
                combination_key=key,
                options=options,
                values=list(combination),
            )
        )
        db.session.commit()
        existing.add(key)
        created += 1

    logger.info("Created %d variants on %s for %s", created, handle, shop)
    return created
