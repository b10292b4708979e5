# gymdesk/domain/services/legacy_payment_notes.py

"""
Compatibility parser for renewal intent written into payment notes.

Older payment records carry the plan only as a ``tipoPago:<token>`` tag in the
free-text notes. New intake uses ``Payment.membership_plan``; this module is
kept so those records keep renewing and can be removed on its own once the
notes have been migrated.
"""

import logging
import re
from typing import Optional

from gymdesk.domain.models.payment_domain_model import MembershipPlan

logger = logging.getLogger(__name__)

PLAN_TAG_PATTERN = re.compile(r"tipoPago:\s*(\w+)", re.IGNORECASE)

PLAN_TOKENS = {
    "diario": MembershipPlan.DAILY,
    "mensual": MembershipPlan.MONTHLY,
    "trimestral": MembershipPlan.QUARTERLY,
    "semestral": MembershipPlan.SEMESTER,
    "anual": MembershipPlan.ANNUAL,
}


def plan_from_notes(notes: Optional[str]) -> Optional[MembershipPlan]:
    """Return the plan named by the first ``tipoPago:`` tag, or None."""
    if notes is None or not notes.strip():
        return None

    match = PLAN_TAG_PATTERN.search(notes)
    if not match:
        return None

    token = match.group(1).lower()
    plan = PLAN_TOKENS.get(token)
    if plan is None:
        logger.debug(f"Unrecognized tipoPago token in payment notes: {token!r}")
    else:
        logger.debug(f"Renewal plan {plan.value} taken from legacy payment notes")
    return plan
