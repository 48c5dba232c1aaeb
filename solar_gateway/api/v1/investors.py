"""Investor endpoints - registration, investments and portfolio stats"""

from typing import Optional
from fastapi import APIRouter, Depends

from solar_gateway.api.dependencies import get_investor_controller
from solar_gateway.api.v1.schemas import (
    CreateInvestorRequest,
    InvestmentRequest,
    InvestmentSchema,
    InvestorIn,
    InvestorStatResponse,
)
from solar_gateway.controllers.investor import InvestorController

router = APIRouter()


@router.post("/investors", response_model=InvestorIn, status_code=201)
def create_investor(
    request_body: Optional[CreateInvestorRequest] = None,
    controller: InvestorController = Depends(get_investor_controller),
):
    investor = request_body.investor.model_dump() if request_body and request_body.investor else None
    return InvestorIn(**controller.create_investor(investor))


@router.post("/investors/{email}/investments", response_model=InvestmentSchema, status_code=201)
def invest(
    email: str,
    request_body: InvestmentRequest,
    controller: InvestorController = Depends(get_investor_controller),
):
    """Buy a share of a contract's unsold amount"""
    investment = controller.invest(email, request_body.contract_id, request_body.amount)
    return InvestmentSchema.model_validate(investment)


@router.get("/investors/{email}/stats", response_model=InvestorStatResponse)
def get_investor_stats(email: str, controller: InvestorController = Depends(get_investor_controller)):
    """Rounded carbon reduction and portfolio size for display"""
    return InvestorStatResponse.model_validate(controller.get_investor_stats(email))
