"""
Fixtures compartidas.

Cada test usa su propia base SQLite en un archivo temporal; la app se prueba
con TestClient sobreescribiendo la dependency get_db.
"""
import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "secreto-de-pruebas")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

import agrogestion.models  # noqa: F401
from agrogestion.core.database import enable_sqlite_foreign_keys, get_db
from agrogestion.db.base import Base
from agrogestion.main import app
from agrogestion.models.client import Client, ClientType, DocumentType
from agrogestion.models.product import Currency, Product, ProductCategory, ProductUnit
from agrogestion.models.user import User, UserRole
from agrogestion.core.security import hash_password
from agrogestion.services.auth_service import identity_for, issue_token


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'agrogestion_test.db'}",
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session: Session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(db: Session, email: str, role: UserRole, password: str = "secreto123") -> User:
    user = User(email=email, name=email.split("@")[0], role=role, password_hash=hash_password(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    return _make_user(db, "admin@agro.com", UserRole.admin)


@pytest.fixture
def regular_user(db):
    return _make_user(db, "operador@agro.com", UserRole.user)


@pytest.fixture
def admin_identity(admin_user):
    return identity_for(admin_user)


@pytest.fixture
def user_identity(regular_user):
    return identity_for(regular_user)


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {issue_token(admin_user)}"}


@pytest.fixture
def user_headers(regular_user):
    return {"Authorization": f"Bearer {issue_token(regular_user)}"}


@pytest.fixture
def make_product(db):
    def _make(sku: str, stock: float, price: str = "100.00", name: str = None) -> Product:
        product = Product(
            name=name or f"Producto {sku}",
            category=ProductCategory.semilla,
            sku=sku,
            stock=stock,
            unit=ProductUnit.kg,
            price_current=Decimal(price),
            price_currency=Currency.ARS,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def agro_client(db, regular_user):
    client = Client(
        name="Estancia La Esperanza",
        type=ClientType.company,
        document_type=DocumentType.cuit,
        document_number="30-71234567-8",
        email="compras@laesperanza.com",
        phone="+54 11 4444-5555",
        address={"street": "Ruta 5 km 120", "city": "Pergamino", "state": "Buenos Aires",
                 "zip_code": "2700", "country": "Argentina"},
        business_info={"business_name": "La Esperanza S.A.", "tax_category": "RI", "tax_status": "activo"},
        credit_limit=Decimal("500000"),
        created_by_id=regular_user.id,
    )
    db.add(client)
    db.commit()
    db.refresh(client)
    return client


def gql(client: TestClient, query: str, variables: dict = None, headers: dict = None) -> dict:
    response = client.post("/graphql", json={"query": query, "variables": variables or {}}, headers=headers or {})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def graphql(client):
    def _run(query: str, variables: dict = None, headers: dict = None) -> dict:
        return gql(client, query, variables, headers)

    return _run
