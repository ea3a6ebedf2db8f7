"""
API router
"""

from fastapi import APIRouter
from contract_explainer.api.v1 import contract_analysis
from contract_explainer.api.v1 import checkout
from contract_explainer.api.v1 import health

api_router = APIRouter()

# Public endpoints consumed by the frontend
api_router.include_router(contract_analysis.router, prefix="/api", tags=["contracts"])
api_router.include_router(checkout.router, prefix="/api", tags=["payments"])

# Service endpoints
api_router.include_router(health.router, prefix="/health", tags=["service"])
