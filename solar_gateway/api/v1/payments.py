"""POST /v1/payments/run - Monthly payment run across all contracts"""

from fastapi import APIRouter, Depends

from solar_gateway.api.dependencies import get_homeowner_controller
from solar_gateway.api.v1.schemas import PaymentRunResponse
from solar_gateway.controllers.homeowner import HomeownerController

router = APIRouter()


@router.post("/payments/run", response_model=PaymentRunResponse)
async def make_all_payments(controller: HomeownerController = Depends(get_homeowner_controller)):
    """
    Attempt every contract's payment, then advance the billing month.

    Returns:
        Counts of paid, not due and failed contracts for the month processed
    """
    summary = await controller.make_all_payments()
    return PaymentRunResponse.model_validate(summary)
