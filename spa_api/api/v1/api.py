from fastapi import APIRouter
from spa_api.api.v1.endpoints import appointments, financials, history, services, settlements

api_router = APIRouter()

api_router.include_router(settlements.router, prefix="/settlements", tags=["settlements"])
api_router.include_router(financials.router, prefix="/financials", tags=["financials"])
api_router.include_router(history.router, prefix="/history", tags=["history"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
api_router.include_router(services.router, prefix="/services", tags=["services"])
