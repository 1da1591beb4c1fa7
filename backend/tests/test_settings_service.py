import pytest

from bodega.errors import ValidationError
from bodega.services import settings_service


def test_defaults_come_from_config(db_session):
    settings = settings_service.get_settings()

    assert settings["exchange_rate"] == 40.0
    assert settings["last_rate_update"] is None


def test_update_exchange_rate_stamps_time(db_session):
    settings = settings_service.update_exchange_rate("36.75")

    assert settings["exchange_rate"] == 36.75
    assert settings["last_rate_update"].endswith("Z")
    assert settings_service.get_exchange_rate() == 36.75


@pytest.mark.parametrize("rate", [0, -3, "abc", None])
def test_exchange_rate_must_be_positive(db_session, rate):
    with pytest.raises(ValidationError):
        settings_service.update_exchange_rate(rate)


def test_ticket_options(db_session):
    settings = settings_service.update_ticket_options({"include_qr": True, "ticket_footer": "Gracias"})

    assert settings["include_qr"] is True
    assert settings["ticket_footer"] == "Gracias"

    with pytest.raises(ValidationError):
        settings_service.update_ticket_options({"include_qr": "yes"})


def test_company_info(db_session):
    assert settings_service.get_company_info()["name"] == ""

    company = settings_service.save_company_info({"name": "Bodega La Esquina", "rif": "J-1"})

    assert company["name"] == "Bodega La Esquina"
    assert settings_service.get_company_info()["rif"] == "J-1"

    with pytest.raises(ValidationError):
        settings_service.save_company_info({"rif": "J-1"})
