"""
Tests end-to-end del API GraphQL (/graphql).

Verifican el contrato visible por el front end: nombres de operaciones,
forma de los tipos y `extensions.code` en los errores.
"""
import logging
from datetime import datetime

from agrogestion.core.security import hash_password
from agrogestion.crud import user as user_crud
from agrogestion.models.client import Client
from agrogestion.models.product import Product
from agrogestion.models.sale import Sale
from agrogestion.models.user import User, UserRole
from agrogestion.schemas.user import UserUpdate
from agrogestion.services.auth_service import issue_token

LOGIN = """
mutation Login($email: String!, $password: String!) {
  login(email: $email, password: $password) { token user { id email role } }
}
"""

CREATE_PRODUCT = """
mutation {
  createProduct(name: "Soja DM 46i20", category: "semilla", sku: "SOJ-4620", stock: 100,
                unit: "kg", price: 1200.5, location: {warehouse: "Galpón 1", shelf: "A3"}) {
    id name sku stock unit active minStock
    price { current currency lastUpdate }
    location { warehouse shelf }
  }
}
"""

CREATE_CLIENT = """
mutation {
  createClient(name: "Agro del Sur", type: "company", documentType: "cuit",
               documentNumber: "30-70000000-1", email: "info@agrodelsur.com", phone: "0291-4550000",
               address: {city: "Bahía Blanca", state: "Buenos Aires"},
               businessInfo: {businessName: "Agro del Sur S.R.L.", taxCategory: "RI"}) {
    id name type documentType documentNumber email creditLimit paymentTerms status
    address { city country }
    businessInfo { businessName }
  }
}
"""

CREATE_SALE = """
mutation CreateSale($client: ID!, $products: [SaleProductInput!]!) {
  createSale(client: $client, products: $products, paymentMethod: "cash") {
    id totalAmount status paymentMethod
    client { id name }
    products { quantity unitPrice currency product { id stock } }
    createdBy { email }
  }
}
"""


def _codes(result):
    return [e.get("extensions", {}).get("code") for e in result.get("errors", [])]


class TestSesion:

    def test_login(self, graphql, regular_user):
        result = graphql(LOGIN, {"email": "operador@agro.com", "password": "secreto123"})

        assert "errors" not in result
        payload = result["data"]["login"]
        assert payload["token"]
        assert payload["user"] == {"id": str(regular_user.id), "email": "operador@agro.com", "role": "user"}

    def test_login_invalido(self, graphql, regular_user):
        result = graphql(LOGIN, {"email": "operador@agro.com", "password": "mala"})

        assert _codes(result) == ["INVALID_CREDENTIALS"]

    def test_register_y_me(self, graphql):
        result = graphql('mutation { register(email: "nuevo@agro.com", password: "clave123", name: "Nuevo") '
                         '{ id role } }')
        assert result["data"]["register"]["role"] == "user"

        login = graphql(LOGIN, {"email": "nuevo@agro.com", "password": "clave123"})
        token = login["data"]["login"]["token"]

        me = graphql("{ me { email name } }", headers={"Authorization": f"Bearer {token}"})
        assert me["data"]["me"] == {"email": "nuevo@agro.com", "name": "Nuevo"}

    def test_register_duplicado(self, graphql, regular_user):
        result = graphql('mutation { register(email: "operador@agro.com", password: "clave123", name: "X") { id } }')

        assert _codes(result) == ["DUPLICATE_KEY"]

    def test_me_sin_token(self, graphql):
        result = graphql("{ me { email } }")

        assert _codes(result) == ["UNAUTHENTICATED"]


class TestAutorizacion:

    def test_lecturas_publicas(self, graphql):
        result = graphql("{ products { id } clients { id } sales { id } }")

        assert "errors" not in result
        assert result["data"] == {"products": [], "clients": [], "sales": []}

    def test_mutacion_sin_token(self, graphql, db):
        result = graphql(CREATE_PRODUCT)

        assert _codes(result) == ["UNAUTHENTICATED"]
        assert db.query(Product).count() == 0

    def test_token_invalido_es_anonimo(self, graphql):
        result = graphql(CREATE_PRODUCT, headers={"Authorization": "Bearer basura"})

        assert _codes(result) == ["UNAUTHENTICATED"]

    def test_users_requiere_admin(self, graphql, user_headers, admin_headers):
        forbidden = graphql("{ users { email } }", headers=user_headers)
        assert _codes(forbidden) == ["FORBIDDEN"]

        allowed = graphql("{ users { email role } }", headers=admin_headers)
        assert "errors" not in allowed
        assert {"email": "admin@agro.com", "role": "admin"} in allowed["data"]["users"]

    def test_create_user_por_admin(self, graphql, admin_headers):
        result = graphql(
            'mutation { createUser(email: "vendedor@agro.com", password: "clave123", name: "Vendedor", '
            'role: "admin") { email role } }',
            headers=admin_headers,
        )

        assert result["data"]["createUser"] == {"email": "vendedor@agro.com", "role": "admin"}


class TestInventarioYClientes:

    def test_create_product(self, graphql, user_headers):
        result = graphql(CREATE_PRODUCT, headers=user_headers)

        assert "errors" not in result
        product = result["data"]["createProduct"]
        assert product["price"]["current"] == 1200.5
        assert product["price"]["currency"] == "ARS"
        assert product["price"]["lastUpdate"]
        assert product["location"] == {"warehouse": "Galpón 1", "shelf": "A3"}
        assert product["active"] is True
        assert product["minStock"] == 0

    def test_sku_duplicado(self, graphql, user_headers):
        graphql(CREATE_PRODUCT, headers=user_headers)
        result = graphql(CREATE_PRODUCT, headers=user_headers)

        assert _codes(result) == ["DUPLICATE_KEY"]

    def test_categoria_invalida(self, graphql, user_headers):
        result = graphql(
            'mutation { createProduct(name: "X", category: "maquinaria", sku: "X-1", stock: 1, unit: "kg", '
            'price: 1) { id } }',
            headers=user_headers,
        )

        assert _codes(result) == ["VALIDATION_ERROR"]
        assert result["errors"][0]["extensions"]["field"] == "category"

    def test_update_product(self, graphql, user_headers, make_product):
        product = make_product("UPD-1", 10)

        result = graphql(
            'mutation($id: ID!) { updateProduct(id: $id, stock: 25, price: 3.5, currency: "USD") '
            '{ stock price { current currency } } }',
            {"id": str(product.id)},
            headers=user_headers,
        )

        assert result["data"]["updateProduct"] == {"stock": 25, "price": {"current": 3.5, "currency": "USD"}}

    def test_update_product_inexistente(self, graphql, user_headers):
        result = graphql('mutation { updateProduct(id: "999", stock: 1) { id } }', headers=user_headers)

        assert _codes(result) == ["NOT_FOUND"]

    def test_product_inexistente_es_null(self, graphql):
        result = graphql('{ product(id: "999") { id } }')

        assert result["data"] == {"product": None}

    def test_create_client(self, graphql, user_headers):
        result = graphql(CREATE_CLIENT, headers=user_headers)

        assert "errors" not in result
        client = result["data"]["createClient"]
        assert client["documentType"] == "cuit"
        assert client["creditLimit"] == 0
        assert client["paymentTerms"] == 30
        assert client["status"] == "active"
        assert client["address"] == {"city": "Bahía Blanca", "country": "Argentina"}
        assert client["businessInfo"] == {"businessName": "Agro del Sur S.R.L."}

    def test_delete_client(self, graphql, user_headers):
        created = graphql(CREATE_CLIENT, headers=user_headers)["data"]["createClient"]

        result = graphql('mutation($id: ID!) { deleteClient(id: $id) }', {"id": created["id"]}, headers=user_headers)
        assert result["data"] == {"deleteClient": True}

        again = graphql('mutation($id: ID!) { deleteClient(id: $id) }', {"id": created["id"]}, headers=user_headers)
        assert again["data"] == {"deleteClient": False}


class TestVentas:

    def test_create_sale(self, graphql, user_headers, agro_client, make_product):
        product = make_product("VTA-1", 100)

        result = graphql(
            CREATE_SALE,
            {"client": str(agro_client.id), "products": [{"product": str(product.id), "quantity": 30, "unitPrice": 50}]},
            headers=user_headers,
        )

        assert "errors" not in result
        sale = result["data"]["createSale"]
        assert sale["totalAmount"] == 1500
        assert sale["status"] == "pending"
        assert sale["paymentMethod"] == "cash"
        assert sale["client"]["name"] == "Estancia La Esperanza"
        assert sale["createdBy"]["email"] == "operador@agro.com"
        assert sale["products"] == [
            {"quantity": 30, "unitPrice": 50, "currency": "ARS", "product": {"id": str(product.id), "stock": 70}}
        ]

    def test_stock_insuficiente(self, graphql, user_headers, agro_client, make_product, db):
        product = make_product("VTA-2", 10)

        result = graphql(
            CREATE_SALE,
            {"client": str(agro_client.id), "products": [{"product": str(product.id), "quantity": 15, "unitPrice": 1}]},
            headers=user_headers,
        )

        assert result["data"] is None
        error = result["errors"][0]
        assert error["extensions"]["code"] == "INSUFFICIENT_STOCK"
        assert error["extensions"]["productId"] == str(product.id)
        assert error["extensions"]["available"] == 10
        db.refresh(product)
        assert product.stock == 10

    def test_cliente_inexistente(self, graphql, user_headers, make_product):
        product = make_product("VTA-3", 10)

        result = graphql(
            CREATE_SALE,
            {"client": "424242", "products": [{"product": str(product.id), "quantity": 1, "unitPrice": 1}]},
            headers=user_headers,
        )

        assert _codes(result) == ["NOT_FOUND"]

    def test_sin_lineas(self, graphql, user_headers, agro_client):
        result = graphql(CREATE_SALE, {"client": str(agro_client.id), "products": []}, headers=user_headers)

        assert _codes(result) == ["VALIDATION_ERROR"]

    def test_update_sale_y_consulta(self, graphql, user_headers, agro_client, make_product):
        product = make_product("VTA-4", 10)
        created = graphql(
            CREATE_SALE,
            {"client": str(agro_client.id), "products": [{"product": str(product.id), "quantity": 1, "unitPrice": 1}]},
            headers=user_headers,
        )["data"]["createSale"]

        updated = graphql(
            'mutation($id: ID!) { updateSale(id: $id, status: "completed", notes: "Entregado") { status notes } }',
            {"id": created["id"]},
            headers=user_headers,
        )
        assert updated["data"]["updateSale"] == {"status": "completed", "notes": "Entregado"}

        fetched = graphql('query($id: ID!) { sale(id: $id) { id status } }', {"id": created["id"]})
        assert fetched["data"]["sale"] == {"id": created["id"], "status": "completed"}


class TestAutorizacionMutaciones:

    def test_create_user_sin_rol_admin(self, graphql, user_headers, db):
        result = graphql(
            'mutation { createUser(email: "intruso@agro.com", password: "clave123", name: "Intruso") { id } }',
            headers=user_headers,
        )

        assert _codes(result) == ["FORBIDDEN"]
        assert db.query(User).filter(User.email == "intruso@agro.com").count() == 0

    def test_create_client_sin_token(self, graphql, db):
        result = graphql(CREATE_CLIENT)

        assert _codes(result) == ["UNAUTHENTICATED"]
        assert db.query(Client).count() == 0

    def test_create_sale_sin_token(self, graphql, agro_client, make_product, db):
        product = make_product("AUTH-1", 10)

        result = graphql(
            CREATE_SALE,
            {"client": str(agro_client.id), "products": [{"product": str(product.id), "quantity": 1, "unitPrice": 1}]},
        )

        assert _codes(result) == ["UNAUTHENTICATED"]
        db.refresh(product)
        assert product.stock == 10

    def test_token_de_usuario_eliminado(self, graphql, db, agro_client, make_product):
        """
        GIVEN: Un usuario con token válido que luego es eliminado
        WHEN: Usa ese token para registrar una venta
        THEN:
            - UNAUTHENTICATED, sin venta registrada ni stock descontado
            - El listado público de ventas sigue funcionando
        """
        user = User(email="temporal@agro.com", name="Temporal", role=UserRole.user,
                    password_hash=hash_password("clave123"))
        db.add(user)
        db.commit()
        db.refresh(user)
        headers = {"Authorization": f"Bearer {issue_token(user)}"}
        assert user_crud.delete_user(db, user.id) is True
        product = make_product("AUTH-2", 10)

        result = graphql(
            CREATE_SALE,
            {"client": str(agro_client.id), "products": [{"product": str(product.id), "quantity": 3, "unitPrice": 1}]},
            headers=headers,
        )

        assert _codes(result) == ["UNAUTHENTICATED"]
        db.refresh(product)
        assert product.stock == 10
        assert db.query(Sale).count() == 0

        listing = graphql("{ sales { id } }")
        assert listing == {"data": {"sales": []}}

    def test_rol_vigente_prevalece_sobre_el_token(self, graphql, db, admin_user, admin_headers):
        user_crud.update_user(db, admin_user.id, UserUpdate(role="user"))

        result = graphql("{ users { email } }", headers=admin_headers)

        assert _codes(result) == ["FORBIDDEN"]


class TestFiltros:

    def test_products_por_estado_de_stock(self, graphql, make_product):
        make_product("F-OUT", 0)
        make_product("F-LOW", 3)
        make_product("F-OK", 40)

        result = graphql('{ out: products(stockStatus: "out") { sku } '
                         'low: products(stockStatus: "low") { sku } '
                         'available: products(stockStatus: "available") { sku } }')

        assert "errors" not in result
        data = result["data"]
        assert [p["sku"] for p in data["out"]] == ["F-OUT"]
        assert sorted(p["sku"] for p in data["low"]) == ["F-LOW", "F-OUT"]
        assert sorted(p["sku"] for p in data["available"]) == ["F-LOW", "F-OK"]

    def test_products_por_categoria(self, graphql, make_product):
        make_product("F-SEM", 5)

        result = graphql('{ semillas: products(category: "semilla") { sku } cereales: products(category: "cereal") { sku } }')

        assert result["data"] == {"semillas": [{"sku": "F-SEM"}], "cereales": []}

    def test_filtro_con_valor_desconocido(self, graphql):
        result = graphql('{ products(stockStatus: "poco") { sku } }')

        assert _codes(result) == ["VALIDATION_ERROR"]
        assert result["errors"][0]["extensions"]["field"] == "stockStatus"

    def test_clients_por_tipo(self, graphql, agro_client):
        result = graphql('{ empresas: clients(type: "company") { id } personas: clients(type: "individual") { id } }')

        assert result["data"] == {"empresas": [{"id": str(agro_client.id)}], "personas": []}

    def test_sales_por_estado_y_cliente(self, graphql, user_headers, agro_client, make_product):
        product = make_product("F-VTA", 10)
        created = graphql(
            CREATE_SALE,
            {"client": str(agro_client.id), "products": [{"product": str(product.id), "quantity": 1, "unitPrice": 1}]},
            headers=user_headers,
        )["data"]["createSale"]

        result = graphql(
            'query($client: ID!) { pendientes: sales(status: "pending", client: $client) { id } '
            'completadas: sales(status: "completed") { id } }',
            {"client": str(agro_client.id)},
        )

        assert result["data"] == {"pendientes": [{"id": created["id"]}], "completadas": []}


class TestActualizaciones:

    def test_update_client_refresca_updated_at(self, graphql, user_headers):
        created = graphql(CREATE_CLIENT, headers=user_headers)["data"]["createClient"]
        before = graphql('query($id: ID!) { client(id: $id) { updatedAt } }', {"id": created["id"]})

        result = graphql(
            'mutation($id: ID!) { updateClient(id: $id, phone: "0291-4551111") { phone name updatedAt } }',
            {"id": created["id"]},
            headers=user_headers,
        )

        updated = result["data"]["updateClient"]
        assert updated["phone"] == "0291-4551111"
        assert updated["name"] == "Agro del Sur"
        previous = datetime.fromisoformat(before["data"]["client"]["updatedAt"])
        assert datetime.fromisoformat(updated["updatedAt"]) > previous

    def test_cambio_de_precio_no_altera_ventas(self, graphql, user_headers, agro_client, make_product):
        """
        GIVEN: Venta de 30 unidades a 50
        WHEN: El producto cambia su precio a 999
        THEN: La venta conserva unitPrice 50 y totalAmount 1500
        """
        product = make_product("SNAP-1", 100)
        sale = graphql(
            CREATE_SALE,
            {"client": str(agro_client.id), "products": [{"product": str(product.id), "quantity": 30, "unitPrice": 50}]},
            headers=user_headers,
        )["data"]["createSale"]

        graphql('mutation($id: ID!) { updateProduct(id: $id, price: 999) { id } }',
                {"id": str(product.id)}, headers=user_headers)

        fetched = graphql(
            'query($id: ID!) { sale(id: $id) { totalAmount products { unitPrice product { price { current } } } } }',
            {"id": sale["id"]},
        )["data"]["sale"]
        assert fetched["totalAmount"] == 1500
        assert fetched["products"][0]["unitPrice"] == 50
        assert fetched["products"][0]["product"]["price"]["current"] == 999


class TestRegistroDeOperaciones:

    def test_operacion_con_nombre_y_llamador(self, graphql, user_headers, caplog):
        caplog.set_level(logging.INFO, logger="agrogestion.graphql.context")

        graphql("query ListarProductos { products { id } }", headers=user_headers)

        messages = [r.getMessage() for r in caplog.records if r.name == "agrogestion.graphql.context"]
        assert any(m.startswith("GraphQL ListarProductos por operador@agro.com") for m in messages)

    def test_operacion_anonima(self, graphql, caplog):
        caplog.set_level(logging.INFO, logger="agrogestion.graphql.context")

        graphql("{ products { id } }")

        messages = [r.getMessage() for r in caplog.records if r.name == "agrogestion.graphql.context"]
        assert any(m.startswith("GraphQL <anónima> por anónimo") for m in messages)
