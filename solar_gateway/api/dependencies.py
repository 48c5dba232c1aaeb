"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from solar_gateway.controllers.homeowner import HomeownerController
from solar_gateway.controllers.investor import InvestorController
from solar_gateway.domain.calendar import Calendar
from solar_gateway.infrastructure.database.session import get_db
from solar_gateway.services.contracts import ContractService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_calendar(request: Request) -> Calendar:
    """Provide the app-wide billing calendar"""
    return request.app.state.calendar


def get_contract_service(
    db: Session = Depends(get_db),
    calendar: Calendar = Depends(get_calendar),
) -> ContractService:
    """Provide contract service bound to the request session"""
    return ContractService(db, calendar)


def get_homeowner_controller(
    db: Session = Depends(get_db),
    calendar: Calendar = Depends(get_calendar),
    contract_service: ContractService = Depends(get_contract_service),
) -> HomeownerController:
    """Provide homeowner controller instance"""
    return HomeownerController(db, calendar, contract_service)


def get_investor_controller(db: Session = Depends(get_db)) -> InvestorController:
    """Provide investor controller instance"""
    return InvestorController(db)
