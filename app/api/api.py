from fastapi import APIRouter
from app.api.endpoints import organization, payment
from app.schemas.common import HealthResponse

api_router = APIRouter()
api_router.include_router(payment.router, tags=["payment"])
api_router.include_router(organization.router, tags=["organization"])

@api_router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    return {"status": "ok"}
