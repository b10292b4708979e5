# gymdesk/domain/services/renewal_extension.py

"""
Mapping from a payment to the calendar extension it buys.

Resolution order:
    1. membership payment types carry their own extension;
    2. otherwise the structured ``membership_plan`` of the payment;
    3. otherwise the legacy ``tipoPago:`` tag in the notes.
Anything else means the payment does not renew a membership.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from gymdesk.domain.models.payment_domain_model import MembershipPlan, PaymentType
from gymdesk.domain.services.legacy_payment_notes import plan_from_notes


@dataclass(frozen=True)
class RenewalExtension:
    """Calendar interval added to a membership. Never persisted."""
    days: int = 0
    months: int = 0

    def apply(self, base: date) -> date:
        """
        Add the interval to ``base``.

        Month arithmetic keeps the day of month and clamps to the last day of
        a shorter target month (Jan 31 + 1 month -> Feb 28/29).
        """
        return base + relativedelta(months=self.months, days=self.days)


PLAN_EXTENSIONS = {
    MembershipPlan.DAILY: RenewalExtension(days=1),
    MembershipPlan.MONTHLY: RenewalExtension(months=1),
    MembershipPlan.QUARTERLY: RenewalExtension(months=3),
    MembershipPlan.SEMESTER: RenewalExtension(months=6),
    MembershipPlan.ANNUAL: RenewalExtension(months=12),
}

PAYMENT_TYPE_PLANS = {
    PaymentType.DAILY_MEMBERSHIP: MembershipPlan.DAILY,
    PaymentType.MONTHLY_MEMBERSHIP: MembershipPlan.MONTHLY,
    PaymentType.QUARTERLY_MEMBERSHIP: MembershipPlan.QUARTERLY,
    PaymentType.SEMESTER_MEMBERSHIP: MembershipPlan.SEMESTER,
    PaymentType.ANNUAL_MEMBERSHIP: MembershipPlan.ANNUAL,
}


def resolve_extension(
        payment_type: Optional[PaymentType],
        notes: Optional[str],
        membership_plan: Optional[MembershipPlan] = None,
) -> Optional[RenewalExtension]:
    """Return the extension bought by a payment, or None when it renews nothing."""
    plan = PAYMENT_TYPE_PLANS.get(payment_type)
    if plan is None:
        plan = membership_plan
    if plan is None:
        plan = plan_from_notes(notes)
    if plan is None:
        return None
    return PLAN_EXTENSIONS[plan]
