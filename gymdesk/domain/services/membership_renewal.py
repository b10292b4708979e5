# gymdesk/domain/services/membership_renewal.py

"""
Membership renewal triggered by a recorded payment.

The engine is not idempotent: every call with a qualifying payment stacks one
more extension. Callers invoke it once per payment creation.
"""

import logging
from datetime import date
from typing import Optional

from gymdesk.application.ports.outbound import IClientStore
from gymdesk.domain.exceptions import RenewalPreconditionException
from gymdesk.domain.models.client_domain_model import MembershipHolder
from gymdesk.domain.models.payment_domain_model import PaymentRecord, PaymentStatus
from gymdesk.domain.services.membership_status import resolve_status
from gymdesk.domain.services.renewal_extension import resolve_extension

logger = logging.getLogger(__name__)


class MembershipRenewalEngine:
    """
    Extends a client's membership when a PAID payment buys one.

    Attributes:
        client_store: Port used to persist the updated client
    """

    def __init__(self, client_store: IClientStore):
        self.client_store = client_store

    @staticmethod
    def _check_preconditions(client: MembershipHolder, payment: PaymentRecord) -> None:
        if payment.id is None:
            raise RenewalPreconditionException(
                detail="Renewal requires a persisted payment"
            )
        if client.gym_id != payment.gym_id:
            raise RenewalPreconditionException(
                detail="Client and payment belong to different gyms"
            )
        if client.id is not None and payment.client_id != client.id:
            raise RenewalPreconditionException(
                detail=f"Payment {payment.id} does not reference client {client.id}"
            )

    async def apply_renewal(
            self,
            client: MembershipHolder,
            payment: PaymentRecord,
            today: Optional[date] = None,
    ) -> Optional[MembershipHolder]:
        """
        Apply the membership extension bought by ``payment`` to ``client``.

        Args:
            client: Client referenced by the payment
            payment: Persisted payment
            today: Reference date, defaults to the current date

        Returns:
            The saved client, or None when the payment renews nothing

        Raises:
            RenewalPreconditionException: If client and payment do not match
        """
        self._check_preconditions(client, payment)

        if payment.status != PaymentStatus.PAID:
            return None

        extension = resolve_extension(payment.payment_type, payment.notes, payment.membership_plan)
        if extension is None:
            return None

        today = today or date.today()
        payment_date = payment.payment_date or today
        current_expiry = client.membership_expiry

        # Stack on an unexpired membership, otherwise restart at the payment date
        if current_expiry is not None and current_expiry >= payment_date:
            base = current_expiry
        else:
            base = payment_date
        new_expiry = extension.apply(base)

        if payment_date > today or current_expiry is None or current_expiry < payment_date:
            client.membership_start = payment_date
        client.membership_expiry = new_expiry
        client.status = resolve_status(today, client.membership_start, client.membership_expiry)

        saved = await self.client_store.save(client)
        logger.info(
            f"Membership renewed for client {client.id} (gym {client.gym_id}) "
            f"by payment {payment.id}: expiry {current_expiry} -> {new_expiry}, status {client.status.value}"
        )
        return saved
