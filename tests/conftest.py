import pytest
from options_manager import create_app
from options_manager.extensions import db as _db

SHOP = "demo-shop.myshopify.com"
OTHER_SHOP = "other-shop.myshopify.com"


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app("testing")
    with app.app_context():
        yield app


@pytest.fixture
def db(app):
    """Fresh schema per test; services commit, so savepoints would leak."""
    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture
def client(app, db):
    return app.test_client()


@pytest.fixture
def shop_headers():
    return {"X-Shopify-Shop-Domain": SHOP}
