import logging
import httpx
from flask import current_app

logger = logging.getLogger(__name__)

BASE_URL = "https://{shop}/admin/api/{version}/graphql.json"

PRODUCT_BY_HANDLE_QUERY = """
query getProductId($handle: String!) {
  productByHandle(handle: $handle) {
    id
    title
    handle
  }
}"""

PRODUCT_VARIANT_CREATE_MUTATION = """
mutation productVariantCreate($input: ProductVariantInput!) {
  productVariantCreate(input: $input) {
    product {
      id
      title
    }
    productVariant {
      id
      title
      sku
      price
      inventoryQuantity
    }
    userErrors {
      field
      message
    }
  }
}"""


def _url(shop):
    return BASE_URL.format(shop=shop, version=current_app.config["SHOPIFY_API_VERSION"])


def _graphql(shop, query, variables):
    """POST a GraphQL document to the shop's Admin API and return ``data``."""
    try:
        resp = httpx.post(
            _url(shop),
            json={"query": query, "variables": variables},
            headers={
                "X-Shopify-Access-Token": current_app.config["SHOPIFY_ADMIN_ACCESS_TOKEN"],
                "Content-Type": "application/json",
            },
            timeout=30,
        )
    except httpx.HTTPError as e:
        logger.error("Shopify request failed for %s: %s", shop, e)
        raise RuntimeError(f"Shopify request failed: {e}") from e

    try:
        resp.raise_for_status()
        body = resp.json()
    except (httpx.HTTPStatusError, ValueError) as e:
        logger.error("Shopify API error for %s: %s", shop, e)
        raise RuntimeError(f"Shopify API error: {e}") from e

    if body.get("errors"):
        logger.error("Shopify GraphQL errors for %s: %s", shop, body["errors"])
        first = body["errors"][0]
        message = first.get("message", "unknown") if isinstance(first, dict) else first
        raise RuntimeError(f"Shopify API error: {message}")
    return body.get("data") or {}


def get_product_id(shop, handle):
    """Resolve a product handle to its Admin API id."""
    data = _graphql(shop, PRODUCT_BY_HANDLE_QUERY, {"handle": handle})
    product = data.get("productByHandle")
    if not product:
        raise LookupError(f"Product with handle {handle} not found")
    return product["id"]


def product_variant_create(shop, variant_input):
    """Create a variant; returns the ``productVariantCreate`` payload."""
    data = _graphql(
        shop,
        PRODUCT_VARIANT_CREATE_MUTATION,
        {
            "input": {
                "productId": variant_input["productId"],
                "title": variant_input.get("title"),
                "sku": variant_input.get("sku"),
                "price": variant_input.get("price"),
                "inventoryQuantity": variant_input.get("inventoryQuantity"),
                "options": variant_input.get("options", []),
            }
        },
    )
    payload = data.get("productVariantCreate") or {}
    user_errors = payload.get("userErrors") or []
    if user_errors:
        raise RuntimeError(user_errors[0].get("message", "Variant creation failed"))
    return payload
