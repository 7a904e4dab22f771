from fastapi import APIRouter

from thermotreat.api.v1.endpoints import (
    evaluations,
    health,
    thermal,
    treatment_options,
    treatments,
)

api_router = APIRouter()

# ==============================================================================
# 1. Calculation Core (열/수력 계산, 처리기 용량 산정)
# ==============================================================================
api_router.include_router(
    thermal.router, prefix="/thermal-calculations", tags=["Thermal Calculations"]
)
api_router.include_router(treatments.router, prefix="/treatments", tags=["Treatments"])

# ==============================================================================
# 2. Catalog & Evaluations (카탈로그 및 평가)
# ==============================================================================
api_router.include_router(
    treatment_options.router, prefix="/treatment-options", tags=["Treatment Options"]
)
api_router.include_router(evaluations.router, prefix="/evaluations", tags=["Evaluations"])

# ==============================================================================
# 3. System (헬스 체크)
# ==============================================================================
api_router.include_router(health.router, tags=["Health"])
