from fastapi import APIRouter

from .ledger import assets_router, dividends_router, liabilities_router, monthly_payments_router, salaries_router
from .property import properties_uk_router, real_estate_router

router = APIRouter()
router.include_router(salaries_router, prefix="/salaries")
router.include_router(assets_router, prefix="/assets")
router.include_router(liabilities_router, prefix="/liabilities")
router.include_router(dividends_router, prefix="/dividends")
router.include_router(monthly_payments_router, prefix="/monthly-payments")
router.include_router(real_estate_router, prefix="/real-estate")
router.include_router(properties_uk_router, prefix="/properties-uk")
