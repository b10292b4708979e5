from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from gymdesk.application.dtos.client_dto import ClientCreate, ClientUpdate
from gymdesk.application.dtos.payment_dto import PaymentCreate, PaymentUpdate
from gymdesk.domain.exceptions import TenantContextMissingException
from gymdesk.domain.models.tenant_domain_model import TenantContext, require_tenant


def test_client_create_normalizes_input():
    client = ClientCreate(
        first_name="  Ana ",
        last_name=" ",
        national_id="1-0234-0567",
        phone="+506 8888-1234",
        email="",
        notes=" VIP ",
    )
    assert client.first_name == "Ana"
    assert client.last_name is None
    assert client.national_id == "102340567"
    assert client.phone == "+50688881234"
    assert client.email is None
    assert client.notes == "VIP"


@pytest.mark.parametrize(
    "field, value",
    [
        ("first_name", "   "),
        ("first_name", "x" * 121),
        ("national_id", "12345"),
        ("phone", "0123456789"),
        ("phone", "12345"),
        ("email", "not-an-email"),
        ("notes", "n" * 501),
    ],
)
def test_client_create_rejects_invalid_fields(field, value):
    data = {"first_name": "Ana", field: value}
    with pytest.raises(ValidationError):
        ClientCreate(**data)


def test_client_create_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        ClientCreate(first_name="Ana", gym_id=2)


def test_client_update_keeps_only_sent_fields():
    update = ClientUpdate(phone="8888 1234", membership_expiry=date(2024, 5, 1))
    assert update.to_dict(exclude_unset=True) == {"phone": "88881234", "membership_expiry": date(2024, 5, 1)}


def test_client_update_changes_keep_explicit_nulls():
    update = ClientUpdate.model_validate({"membership_expiry": None, "notes": "", "status": None})
    assert update.changes() == {"membership_expiry": None, "notes": None}


def test_client_update_first_name_cannot_be_cleared():
    with pytest.raises(ValidationError):
        ClientUpdate.model_validate({"first_name": None})


def test_payment_amount_rules():
    base = dict(client_id=1, payment_method="CASH", payment_type="MONTHLY_MEMBERSHIP", payment_date="2024-03-10")
    assert PaymentCreate(amount="15000.50", **base).amount == Decimal("15000.50")
    for bad in ("0", "0.001", "-5", "12.345"):
        with pytest.raises(ValidationError):
            PaymentCreate(amount=bad, **base)


def test_payment_defaults():
    payment = PaymentCreate(
        client_id=1, amount="10", payment_method="SINPE", payment_type="OTHER", payment_date="2024-03-10"
    )
    assert payment.currency.value == "CRC"
    assert payment.status.value == "PAID"
    assert payment.membership_plan is None


@pytest.mark.parametrize("field", ["amount", "currency", "client_id", "gym_id", "created_at"])
def test_payment_update_rejects_immutable_fields(field):
    with pytest.raises(ValidationError):
        PaymentUpdate(**{field: "1"})


def test_require_tenant():
    assert require_tenant(TenantContext(gym_id=3)) == 3
    for tenant in (None, TenantContext(gym_id=0), TenantContext(gym_id=-1)):
        with pytest.raises(TenantContextMissingException):
            require_tenant(tenant)


def test_tenant_context_is_immutable():
    tenant = TenantContext(gym_id=1)
    assert tenant.client_ip == "unknown"
    with pytest.raises(AttributeError):
        tenant.gym_id = 2
