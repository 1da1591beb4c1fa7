import pytest

from bodega.errors import ValidationError
from bodega.services.pricing import compute_totals, derive_status


def test_cash_transaction_is_paid_in_full():
    totals = compute_totals([10.0, 2.5], exchange_rate=40)

    assert totals.total_usd == 12.5
    assert totals.total_bs == 500.0
    assert totals.paid_amount_usd == 12.5
    assert totals.status == "paid"


def test_discount_is_subtracted():
    totals = compute_totals([10.0], exchange_rate=1, discount_usd=3)
    assert totals.total_usd == 7.0


def test_discount_larger_than_subtotal_is_rejected_not_clamped():
    with pytest.raises(ValidationError):
        compute_totals([10.0], exchange_rate=1, discount_usd=10.01)


def test_discount_equal_to_subtotal_gives_zero_total():
    totals = compute_totals([10.0], exchange_rate=1, discount_usd=10)
    assert totals.total_usd == 0
    assert totals.status == "paid"


def test_negative_discount_rejected():
    with pytest.raises(ValidationError):
        compute_totals([10.0], exchange_rate=1, discount_usd=-1)


def test_credit_starts_at_initial_payment():
    totals = compute_totals([10.0], exchange_rate=1, is_credit=True, initial_payment=4)

    assert totals.paid_amount_usd == 4
    assert totals.status == "pending"


def test_credit_initial_payment_covering_total_is_paid():
    totals = compute_totals([10.0], exchange_rate=1, is_credit=True, initial_payment=10)
    assert totals.status == "paid"


def test_credit_initial_payment_above_total_rejected():
    with pytest.raises(ValidationError):
        compute_totals([10.0], exchange_rate=1, is_credit=True, initial_payment=11)


def test_initial_payment_ignored_for_cash():
    totals = compute_totals([10.0], exchange_rate=1, is_credit=False, initial_payment=3)
    assert totals.paid_amount_usd == 10.0


@pytest.mark.parametrize("rate", [0, -1, None, "x"])
def test_exchange_rate_must_be_positive(rate):
    with pytest.raises(ValidationError):
        compute_totals([1.0], exchange_rate=rate)


def test_derive_status():
    assert derive_status(9.99, 10) == "pending"
    assert derive_status(10, 10) == "paid"
    assert derive_status(12, 10) == "paid"


def test_totals_are_kept_to_the_cent():
    totals = compute_totals([0.1, 0.1, 0.1], exchange_rate=40, is_credit=True)

    assert totals.total_usd == 0.3
    assert totals.total_bs == 12.0
    assert totals.status == "pending"


def test_derive_status_compares_cents():
    assert derive_status(0.3, 0.1 + 0.1 + 0.1) == "paid"
    assert derive_status(0.29, 0.1 + 0.1 + 0.1) == "pending"
