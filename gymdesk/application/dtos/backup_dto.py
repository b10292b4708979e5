# gymdesk/application/dtos/backup_dto.py

from datetime import datetime
from typing import List

from pydantic import BaseModel

from gymdesk.application.dtos.client_dto import ClientOutput
from gymdesk.application.dtos.payment_dto import PaymentOutput


class BackupExport(BaseModel):
    """Snapshot of one gym's clients and payments."""
    gym_id: int
    generated_at: datetime
    clients: List[ClientOutput]
    payments: List[PaymentOutput]
