"""
Pytest fixtures for the bodega backend tests.

Provides an in-memory application, a clean store per test and a few
catalog records that most scenarios start from.
"""

import pytest
from bodega import create_app
from bodega.extensions import db
from bodega.services import catalog_service


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'DEFAULT_EXCHANGE_RATE': 40.0,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Empty every table before each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        db.session.rollback()


@pytest.fixture(scope='function')
def product_p1(db_session):
    return catalog_service.upsert_product({
        "id": "P1",
        "name": "Harina PAN",
        "sku": "HAR-001",
        "category": "Viveres",
        "price_usd": 5.0,
        "cost_usd": 3.0,
        "stock": 10,
        "min_stock": 2,
    })


@pytest.fixture(scope='function')
def product_p2(db_session):
    return catalog_service.upsert_product({
        "id": "P2",
        "name": "Queso blanco",
        "sku": "QUE-001",
        "category": "Lacteos",
        "price_usd": 4.5,
        "cost_usd": 3.2,
        "stock": 2.5,
        "min_stock": 3,
    })


@pytest.fixture(scope='function')
def customer(db_session):
    return catalog_service.upsert_contact("customer", {
        "id": "C1",
        "name": "Maria Perez",
        "rif": "V-12345678",
        "phone": "0414-5551234",
        "email": "maria@example.com",
    })


@pytest.fixture(scope='function')
def supplier(db_session):
    return catalog_service.upsert_contact("supplier", {
        "id": "S1",
        "name": "Distribuidora Centro",
        "rif": "J-30000000-1",
        "phone": "0212-5550000",
    })


@pytest.fixture(scope='function')
def seller(db_session):
    return catalog_service.upsert_contact("seller", {
        "id": "V1",
        "name": "Luis",
        "phone": "0424-5559999",
    })
