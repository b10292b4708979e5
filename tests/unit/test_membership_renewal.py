from datetime import date
from types import SimpleNamespace

import pytest

from gymdesk.application.ports.outbound import IClientStore
from gymdesk.domain.exceptions import RenewalPreconditionException
from gymdesk.domain.models.client_domain_model import ClientStatus
from gymdesk.domain.models.payment_domain_model import MembershipPlan, PaymentStatus, PaymentType
from gymdesk.domain.services.membership_renewal import MembershipRenewalEngine

TODAY = date(2024, 3, 10)


class InMemoryClientStore(IClientStore):
    def __init__(self):
        self.saved = []

    async def find_by_id(self, tenant, client_id):
        return None

    async def save(self, client):
        self.saved.append((client.membership_start, client.membership_expiry, client.status))
        return client


def make_client(start=None, expiry=None, gym_id=1, status=ClientStatus.INACTIVE):
    return SimpleNamespace(id=7, gym_id=gym_id, membership_start=start, membership_expiry=expiry, status=status)


def make_payment(payment_type=PaymentType.MONTHLY_MEMBERSHIP, payment_date=TODAY, status=PaymentStatus.PAID,
                 notes=None, membership_plan=None, id=100, client_id=7, gym_id=1):
    return SimpleNamespace(
        id=id, gym_id=gym_id, client_id=client_id, payment_type=payment_type,
        membership_plan=membership_plan, status=status, notes=notes, payment_date=payment_date,
    )


@pytest.fixture
def store():
    return InMemoryClientStore()


@pytest.fixture
def renewal_engine(store):
    return MembershipRenewalEngine(store)


async def test_first_membership_starts_on_payment_date(renewal_engine, store):
    client = make_client()

    result = await renewal_engine.apply_renewal(client, make_payment(), today=TODAY)

    assert result is client
    assert client.membership_start == TODAY
    assert client.membership_expiry == date(2024, 4, 10)
    assert client.status == ClientStatus.ACTIVE
    assert len(store.saved) == 1


async def test_monthly_renewal_clamps_to_leap_february(renewal_engine):
    client = make_client(start=date(2024, 1, 1), expiry=date(2024, 1, 31))
    payment = make_payment(payment_date=date(2024, 1, 31))

    await renewal_engine.apply_renewal(client, payment, today=date(2024, 1, 31))

    assert client.membership_expiry == date(2024, 2, 29)
    assert client.membership_start == date(2024, 1, 1)


async def test_unexpired_membership_is_stacked(renewal_engine):
    client = make_client(start=date(2024, 2, 1), expiry=date(2024, 3, 31), status=ClientStatus.ACTIVE)

    await renewal_engine.apply_renewal(client, make_payment(payment_type=PaymentType.QUARTERLY_MEMBERSHIP), today=TODAY)

    assert client.membership_start == date(2024, 2, 1)
    assert client.membership_expiry == date(2024, 6, 30)


async def test_lapsed_membership_restarts_at_payment_date(renewal_engine):
    client = make_client(start=date(2023, 11, 1), expiry=date(2024, 1, 1), status=ClientStatus.DELINQUENT)

    await renewal_engine.apply_renewal(client, make_payment(), today=TODAY)

    assert client.membership_start == TODAY
    assert client.membership_expiry == date(2024, 4, 10)
    assert client.status == ClientStatus.ACTIVE


async def test_future_dated_payment_leaves_client_inactive_until_start(renewal_engine):
    client = make_client()
    payment = make_payment(payment_date=date(2024, 3, 20))

    await renewal_engine.apply_renewal(client, payment, today=TODAY)

    assert client.membership_start == date(2024, 3, 20)
    assert client.membership_expiry == date(2024, 4, 20)
    assert client.status == ClientStatus.INACTIVE


async def test_missing_payment_date_defaults_to_today(renewal_engine):
    client = make_client()

    await renewal_engine.apply_renewal(client, make_payment(payment_type=PaymentType.DAILY_MEMBERSHIP,
                                                            payment_date=None), today=TODAY)

    assert client.membership_start == TODAY
    assert client.membership_expiry == date(2024, 3, 11)


async def test_structured_plan_renews_other_payment_types(renewal_engine):
    client = make_client()
    payment = make_payment(payment_type=PaymentType.OTHER, membership_plan=MembershipPlan.SEMESTER)

    await renewal_engine.apply_renewal(client, payment, today=TODAY)

    assert client.membership_expiry == date(2024, 9, 10)


async def test_legacy_notes_tag_renews(renewal_engine):
    client = make_client()
    payment = make_payment(payment_type=PaymentType.OTHER, notes="pago en efectivo tipoPago: anual")

    await renewal_engine.apply_renewal(client, payment, today=TODAY)

    assert client.membership_expiry == date(2025, 3, 10)


async def test_no_extension_leaves_client_untouched(renewal_engine, store):
    client = make_client(start=date(2024, 1, 1), expiry=date(2024, 2, 1), status=ClientStatus.DELINQUENT)
    payment = make_payment(payment_type=PaymentType.OTHER, notes="locker rental")

    assert await renewal_engine.apply_renewal(client, payment, today=TODAY) is None

    assert client.membership_start == date(2024, 1, 1)
    assert client.membership_expiry == date(2024, 2, 1)
    assert client.status == ClientStatus.DELINQUENT
    assert store.saved == []


@pytest.mark.parametrize("status", [PaymentStatus.PENDING, PaymentStatus.VOID, PaymentStatus.REFUNDED])
async def test_unpaid_payment_renews_nothing(renewal_engine, store, status):
    client = make_client()

    assert await renewal_engine.apply_renewal(client, make_payment(status=status), today=TODAY) is None

    assert client.membership_expiry is None
    assert store.saved == []


async def test_applying_twice_extends_twice(renewal_engine, store):
    client = make_client()
    payment = make_payment()

    await renewal_engine.apply_renewal(client, payment, today=TODAY)
    await renewal_engine.apply_renewal(client, payment, today=TODAY)

    assert client.membership_start == TODAY
    assert client.membership_expiry == date(2024, 5, 10)
    assert len(store.saved) == 2


async def test_unsaved_payment_is_rejected(renewal_engine, store):
    with pytest.raises(RenewalPreconditionException):
        await renewal_engine.apply_renewal(make_client(), make_payment(id=None), today=TODAY)
    assert store.saved == []


async def test_cross_gym_pair_is_rejected(renewal_engine, store):
    client = make_client(gym_id=2)
    with pytest.raises(RenewalPreconditionException):
        await renewal_engine.apply_renewal(client, make_payment(gym_id=1), today=TODAY)
    assert client.membership_expiry is None
    assert store.saved == []


async def test_payment_of_another_client_is_rejected(renewal_engine):
    with pytest.raises(RenewalPreconditionException):
        await renewal_engine.apply_renewal(make_client(), make_payment(client_id=8), today=TODAY)
