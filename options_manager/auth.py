import hmac
import logging
import re

from flask import abort, current_app, request

logger = logging.getLogger(__name__)

SHOP_DOMAIN_RE = re.compile(r"^[a-z0-9][a-z0-9-]*\.myshopify\.com$")


def authenticate_admin():
    """Resolve the shop for an admin request or abort with 401.

    Security:
    - X-Shopify-Shop-Domain must name a *.myshopify.com shop
    - Authorization: Bearer <token> must match ADMIN_API_TOKEN when it is set
    """
    expected_token = current_app.config.get("ADMIN_API_TOKEN", "")
    if expected_token:
        header = request.headers.get("Authorization", "")
        token = header[len("Bearer "):] if header.startswith("Bearer ") else ""
        if not token or not hmac.compare_digest(token, expected_token):
            logger.warning("Rejected admin request with bad token")
            abort(401)

    shop = request.headers.get("X-Shopify-Shop-Domain", "").strip().lower()
    if not SHOP_DOMAIN_RE.match(shop):
        logger.warning("Rejected admin request for shop %r", shop)
        abort(401)
    return shop
