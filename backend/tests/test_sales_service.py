"""
Sales commit: totals, status, stock deduction and all-or-nothing writes.
"""

import pytest

from bodega.errors import InsufficientStockError, NotFoundError, PersistenceError, ValidationError
from bodega.services import accounts_service, catalog_service, sales_service, settings_service
from bodega.services import storage_service as store


def test_cash_sale_scenario(product_p1, customer):
    sale = sales_service.commit_sale(
        "C1",
        [{"product_id": "P1", "quantity": 2, "price_usd": 5.00}],
        exchange_rate=40,
    )

    assert sale["total_usd"] == 10.00
    assert sale["total_bs"] == 400.00
    assert sale["exchange_rate"] == 40
    assert sale["status"] == "paid"
    assert sale["paid_amount_usd"] == 10.00
    assert sale["initial_payment_usd"] == 10.00
    assert sale["discount_usd"] == 0
    assert catalog_service.get_product("P1")["stock"] == 8


def test_credit_sale_scenario(product_p1, customer):
    sale = sales_service.commit_sale(
        "C1",
        [{"product_id": "P1", "quantity": 2, "price_usd": 5.00}],
        exchange_rate=40,
        is_credit=True,
        initial_payment=4.00,
    )

    assert sale["status"] == "pending"
    assert sale["paid_amount_usd"] == 4.00
    assert accounts_service.outstanding_balance(sale) == 6.00

    paid = accounts_service.apply_payment(sale["id"], "cxc", 6.00)

    assert paid["status"] == "paid"
    assert paid["paid_amount_usd"] == 10.00


def test_snapshots_names_and_catalog_price(product_p1, customer, seller):
    sale = sales_service.commit_sale(
        "C1", [{"product_id": "P1", "quantity": 1}], exchange_rate=40, seller_id="V1",
    )

    assert sale["customer_name"] == "Maria Perez"
    assert sale["seller_name"] == "Luis"
    assert sale["items"] == [{"product_id": "P1", "name": "Harina PAN", "quantity": 1, "price_usd": 5.0}]

    catalog_service.upsert_contact("customer", {**customer, "name": "Maria P. de Rojas"})
    catalog_service.upsert_product({**catalog_service.get_product("P1"), "name": "Harina", "price_usd": 9})

    stored = sales_service.get_sale(sale["id"])
    assert stored["customer_name"] == "Maria Perez"
    assert stored["items"][0]["name"] == "Harina PAN"
    assert stored["items"][0]["price_usd"] == 5.0


def test_total_is_lines_minus_discount(product_p1, product_p2, customer):
    sale = sales_service.commit_sale(
        "C1",
        [
            {"product_id": "P1", "quantity": 3, "price_usd": 5.0},
            {"product_id": "P2", "quantity": 1.5, "price_usd": 4.5},
        ],
        exchange_rate=40,
        discount_usd=1.25,
    )

    expected = sum(i["quantity"] * i["price_usd"] for i in sale["items"]) - 1.25
    assert sale["total_usd"] == pytest.approx(expected)
    assert sale["total_bs"] == pytest.approx(expected * 40)
    assert accounts_service.outstanding_balance(sale) >= 0
    assert catalog_service.get_product("P2")["stock"] == pytest.approx(1.0)


def test_discount_above_subtotal_is_rejected(product_p1, customer):
    with pytest.raises(ValidationError):
        sales_service.commit_sale(
            "C1", [{"product_id": "P1", "quantity": 1}], exchange_rate=40, discount_usd=6,
        )
    assert store.get_all(store.SALES) == []
    assert catalog_service.get_product("P1")["stock"] == 10


def test_insufficient_stock_leaves_everything_unchanged(product_p1, product_p2, customer):
    with pytest.raises(InsufficientStockError) as exc_info:
        sales_service.commit_sale(
            "C1",
            [
                {"product_id": "P1", "quantity": 1},
                {"product_id": "P2", "quantity": 3},
            ],
            exchange_rate=40,
        )

    assert exc_info.value.details["product_id"] == "P2"
    assert exc_info.value.details["on_hand"] == 2.5
    assert "Queso blanco" in str(exc_info.value)
    assert store.get_all(store.SALES) == []
    assert catalog_service.get_product("P1")["stock"] == 10
    assert catalog_service.get_product("P2")["stock"] == 2.5


def test_repeated_product_lines_are_checked_together(product_p1, customer):
    with pytest.raises(InsufficientStockError):
        sales_service.commit_sale(
            "C1",
            [{"product_id": "P1", "quantity": 6}, {"product_id": "P1", "quantity": 5}],
            exchange_rate=40,
        )
    assert catalog_service.get_product("P1")["stock"] == 10


def test_selling_exact_stock_is_allowed(product_p1, customer):
    sales_service.commit_sale("C1", [{"product_id": "P1", "quantity": 10}], exchange_rate=40)
    assert catalog_service.get_product("P1")["stock"] == 0


@pytest.mark.parametrize("customer_id,items", [
    (None, [{"product_id": "P1", "quantity": 1}]),
    ("", [{"product_id": "P1", "quantity": 1}]),
    ("C1", []),
    ("C1", None),
    ("C1", [{"product_id": "P1", "quantity": 0}]),
    ("C1", [{"product_id": "P1", "quantity": -1}]),
    ("C1", [{"quantity": 1}]),
])
def test_validation_errors(product_p1, customer, customer_id, items):
    with pytest.raises(ValidationError):
        sales_service.commit_sale(customer_id, items, exchange_rate=40)
    assert store.get_all(store.SALES) == []


def test_unknown_references(product_p1, customer):
    with pytest.raises(NotFoundError):
        sales_service.commit_sale("C9", [{"product_id": "P1", "quantity": 1}], exchange_rate=40)
    with pytest.raises(NotFoundError):
        sales_service.commit_sale("C1", [{"product_id": "P9", "quantity": 1}], exchange_rate=40)
    with pytest.raises(NotFoundError):
        sales_service.commit_sale(
            "C1", [{"product_id": "P1", "quantity": 1}], exchange_rate=40, seller_id="V9",
        )


def test_stock_write_failure_rolls_back_the_sale(product_p1, product_p2, customer, monkeypatch):
    real_adjust = catalog_service.adjust_stock
    calls = []

    def flaky_adjust(product_id, delta, commit=True):
        calls.append(product_id)
        if len(calls) == 2:
            raise PersistenceError("store unreachable")
        return real_adjust(product_id, delta, commit=commit)

    monkeypatch.setattr(catalog_service, "adjust_stock", flaky_adjust)

    with pytest.raises(PersistenceError):
        sales_service.commit_sale(
            "C1",
            [{"product_id": "P1", "quantity": 2}, {"product_id": "P2", "quantity": 1}],
            exchange_rate=40,
        )

    assert calls == ["P1", "P2"]
    assert store.get_all(store.SALES) == []
    assert catalog_service.get_product("P1")["stock"] == 10
    assert catalog_service.get_product("P2")["stock"] == 2.5


def test_exchange_rate_is_frozen(product_p1, customer):
    sale = sales_service.commit_sale(
        "C1", [{"product_id": "P1", "quantity": 1}], exchange_rate=settings_service.get_exchange_rate(),
    )
    settings_service.update_exchange_rate(55)

    stored = sales_service.get_sale(sale["id"])
    assert stored["exchange_rate"] == 40
    assert stored["total_bs"] == 200


def test_list_sales_newest_first(product_p1, customer):
    first = sales_service.commit_sale("C1", [{"product_id": "P1", "quantity": 1}], exchange_rate=40)
    second = sales_service.commit_sale("C1", [{"product_id": "P1", "quantity": 1}], exchange_rate=40)

    assert [s["id"] for s in sales_service.list_sales()] == [second["id"], first["id"]]
