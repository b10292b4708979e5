from datetime import date

import pytest

from gymdesk.domain.models.payment_domain_model import MembershipPlan, PaymentType
from gymdesk.domain.services.legacy_payment_notes import plan_from_notes
from gymdesk.domain.services.renewal_extension import RenewalExtension, resolve_extension


@pytest.mark.parametrize(
    "payment_type, expected",
    [
        (PaymentType.DAILY_MEMBERSHIP, RenewalExtension(days=1)),
        (PaymentType.MONTHLY_MEMBERSHIP, RenewalExtension(months=1)),
        (PaymentType.QUARTERLY_MEMBERSHIP, RenewalExtension(months=3)),
        (PaymentType.SEMESTER_MEMBERSHIP, RenewalExtension(months=6)),
        (PaymentType.ANNUAL_MEMBERSHIP, RenewalExtension(months=12)),
    ],
)
def test_membership_types_carry_their_extension(payment_type, expected):
    assert resolve_extension(payment_type, None) == expected


def test_type_takes_precedence_over_plan_and_notes():
    extension = resolve_extension(
        PaymentType.DAILY_MEMBERSHIP, "tipoPago: anual", MembershipPlan.SEMESTER
    )
    assert extension == RenewalExtension(days=1)


def test_structured_plan_used_for_other_types():
    assert resolve_extension(PaymentType.OTHER, None, MembershipPlan.QUARTERLY) == RenewalExtension(months=3)


def test_plan_takes_precedence_over_notes():
    extension = resolve_extension(PaymentType.OTHER, "tipoPago: diario", MembershipPlan.ANNUAL)
    assert extension == RenewalExtension(months=12)


def test_legacy_notes_tag_is_a_fallback():
    assert resolve_extension(PaymentType.OTHER, "Cliente pagó. tipoPago: mensual") == RenewalExtension(months=1)


@pytest.mark.parametrize(
    "notes, expected",
    [
        ("tipoPago:trimestral", MembershipPlan.QUARTERLY),
        ("TIPOPAGO:   SEMESTRAL", MembershipPlan.SEMESTER),
        ("efectivo, tipoPago: Anual, recibo 12", MembershipPlan.ANNUAL),
        ("tipoPago: diario tipoPago: anual", MembershipPlan.DAILY),
        ("tipoPago: quincenal", None),
        ("tipoPago:", None),
        ("pago mensual", None),
        ("   ", None),
        (None, None),
    ],
)
def test_plan_from_notes(notes, expected):
    assert plan_from_notes(notes) == expected


def test_non_membership_payment_without_tag_renews_nothing():
    assert resolve_extension(PaymentType.PENALTY, "late fee") is None
    assert resolve_extension(PaymentType.REGISTRATION, None) is None
    assert resolve_extension(None, None) is None


def test_month_arithmetic_clamps_to_month_end():
    monthly = RenewalExtension(months=1)
    assert monthly.apply(date(2024, 1, 31)) == date(2024, 2, 29)
    assert monthly.apply(date(2023, 1, 31)) == date(2023, 2, 28)
    assert RenewalExtension(months=3).apply(date(2024, 11, 30)) == date(2025, 2, 28)
    assert RenewalExtension(days=1).apply(date(2024, 12, 31)) == date(2025, 1, 1)
