# gymdesk/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from gymdesk.adapters.inbound.api.v1.endpoints import (
    auth_endpoint,
    backup_endpoint,
    client_endpoint,
    payment_endpoint,
)

api_router = APIRouter()

api_router.include_router(auth_endpoint.router, prefix="/auth", tags=["Auth"])
api_router.include_router(client_endpoint.router, prefix="/clients", tags=["Clients"])
api_router.include_router(payment_endpoint.router, prefix="/payments", tags=["Payments"])
api_router.include_router(backup_endpoint.router, prefix="/backup", tags=["Backup"])


@api_router.get("/health", tags=["Health"], summary="Health check")
async def health():
    return {"status": "ok"}
