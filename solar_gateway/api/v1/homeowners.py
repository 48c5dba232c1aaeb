"""Homeowner endpoints - accounts, financing sign-up, payments and option quotes"""

from typing import Optional
from fastapi import APIRouter, Depends, Response

from solar_gateway.api.dependencies import get_homeowner_controller
from solar_gateway.api.v1.schemas import (
    CreateHomeownerRequest,
    HomeownerIn,
    HomeownerListResponse,
    HomeownerSchema,
    OptionDetailsResponse,
    PaymentResponse,
    PaymentSchema,
    SignupRequest,
)
from solar_gateway.controllers.homeowner import HomeownerController

router = APIRouter()


@router.get("/homeowners", response_model=HomeownerListResponse)
def list_homeowners(controller: HomeownerController = Depends(get_homeowner_controller)):
    """List every homeowner with contract funding progress"""
    users = [HomeownerSchema.model_validate(user) for user in controller.list_homeowners()]
    return HomeownerListResponse(users=users)


@router.post("/homeowners", response_model=HomeownerIn, status_code=201)
def create_homeowner(
    request_body: Optional[CreateHomeownerRequest] = None,
    controller: HomeownerController = Depends(get_homeowner_controller),
):
    """Register a homeowner and echo it back"""
    user = request_body.user.model_dump() if request_body and request_body.user else None
    return HomeownerIn(**controller.create_homeowner(user))


@router.get("/homeowners/{email}", response_model=HomeownerSchema)
def get_homeowner(email: str, controller: HomeownerController = Depends(get_homeowner_controller)):
    return HomeownerSchema.model_validate(controller.get_homeowner(email))


@router.delete("/homeowners/{email}")
def delete_homeowner(email: str, controller: HomeownerController = Depends(get_homeowner_controller)):
    controller.delete_homeowner(email)
    return Response(status_code=200)


@router.post("/homeowners/{email}/signup")
def sign_up_for_financing(
    email: str,
    request_body: Optional[SignupRequest] = None,
    controller: HomeownerController = Depends(get_homeowner_controller),
):
    """Open a financing contract for the requested amount"""
    controller.sign_up_for_financing(email, request_body.amount if request_body else None)
    return Response(status_code=200)


@router.post("/homeowners/{email}/payment", response_model=PaymentResponse)
async def make_payment(email: str, controller: HomeownerController = Depends(get_homeowner_controller)):
    """
    Apply the homeowner's monthly payment.

    Returns 203 with an empty body when no payment is due.
    """
    payment = await controller.make_payment(email)
    if payment is None:
        return Response(status_code=203)
    return PaymentResponse(payment=PaymentSchema.model_validate(payment))


@router.get("/homeowners/{email}/options/{option}", response_model=OptionDetailsResponse)
def get_option_details(
    email: str,
    option: str,
    controller: HomeownerController = Depends(get_homeowner_controller),
):
    """Quote contract size, electricity allowance and monthly payment for an option"""
    return OptionDetailsResponse(**controller.get_option_details(option, email))
