"""Homeowner controller - orchestrates repositories and the contract service"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from solar_gateway.domain.calendar import Calendar
from solar_gateway.domain.exceptions import ConflictError, NotFoundError, ValidationError
from solar_gateway.domain.financing import calculate_funded_fraction, get_contract_option, parse_amount
from solar_gateway.domain.models import Payment, StoredContract, StoredHomeowner
from solar_gateway.infrastructure.database.models import Homeowner
from solar_gateway.infrastructure.database.repositories import ContractRepository, HomeownerRepository
from solar_gateway.infrastructure.observability.logging import log_payment_run
from solar_gateway.infrastructure.observability.metrics import calendar_month_gauge
from solar_gateway.services.contracts import ContractService

logger = logging.getLogger(__name__)


@dataclass
class PaymentRunSummary:
    """Outcome counts of a payment run"""

    month: int
    paid: int
    not_due: int
    failed: int


class HomeownerController:
    """Homeowner-facing operations; raises domain exceptions, never builds responses"""

    def __init__(
        self,
        db: Session,
        calendar: Calendar,
        contract_service: ContractService,
    ):
        self.db = db
        self.calendar = calendar
        self.homeowners = HomeownerRepository(db)
        self.contracts = ContractRepository(db)
        self.contract_service = contract_service

    def _to_stored(self, homeowner: Homeowner) -> StoredHomeowner:
        """Project a homeowner, computing funding progress and queue position"""
        stored_contract = None
        contract = homeowner.contract
        if contract is not None:
            investments = self.contracts.get_investments_for_contract(contract.id)
            investment_value = sum(investment.amount for investment in investments)
            position_in_queue = (
                self.contracts.get_contract_position_in_queue(contract.unsold_amount)
                if contract.unsold_amount != 0
                else None
            )
            stored_contract = StoredContract(
                id=contract.id,
                sale_amount=contract.sale_amount,
                total_length=contract.total_length,
                monthly_payment=contract.monthly_payment,
                first_payment_date=contract.first_payment_date,
                unsold_amount=contract.unsold_amount,
                funded_fraction=calculate_funded_fraction(investment_value, contract.sale_amount),
                position_in_queue=position_in_queue,
                homeowner_id=homeowner.id,
            )

        return StoredHomeowner(
            id=homeowner.id,
            name=homeowner.name,
            email=homeowner.email,
            pwd_hash=homeowner.pwd_hash,
            contract=stored_contract,
        )

    def _get_by_email(self, email: str) -> Homeowner:
        homeowner = self.homeowners.get_one_by_email(email)
        if homeowner is None:
            raise NotFoundError(f"Homeowner {email} not found")
        return homeowner

    def list_homeowners(self) -> List[StoredHomeowner]:
        return [self._to_stored(homeowner) for homeowner in self.homeowners.get_all()]

    def create_homeowner(self, user: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Register a homeowner.

        Raises:
            ValidationError: If the user payload is absent
            ConflictError: If the email is already registered
        """
        if not user:
            raise ValidationError("One or more of the required parameters was missing.")

        if self.homeowners.get_one_by_email(user["email"]) is not None:
            raise ConflictError(f"Homeowner {user['email']} already exists")

        self.homeowners.add(
            name=user["name"],
            email=user["email"],
            pwd_hash=user.get("pwd_hash") or "",
        )
        self.db.commit()
        return user

    def get_homeowner(self, email: str) -> StoredHomeowner:
        return self._to_stored(self._get_by_email(email))

    def delete_homeowner(self, email: str) -> None:
        homeowner = self._get_by_email(email)
        self.homeowners.delete(homeowner.id)
        self.db.commit()

    def sign_up_for_financing(self, email: str, amount: Any) -> None:
        """
        Open a financing contract for the homeowner.

        Raises:
            ValidationError: If the amount is missing or not numeric
            NotFoundError: If the homeowner does not exist
        """
        sale_amount = parse_amount(amount, positive=False)
        homeowner = self._get_by_email(email)
        self.contract_service.create_contract(sale_amount, homeowner.id)

    async def make_payment(self, email: str) -> Optional[Payment]:
        """Apply the homeowner's payment; None means no payment was due"""
        return await self.contract_service.make_payment(email)

    async def make_all_payments(self) -> PaymentRunSummary:
        """
        Attempt one payment per contract, then advance the calendar.

        Attempts are independent: a failing contract does not stop the
        others and nothing is rolled back across contracts. The calendar
        advances exactly once, whatever the outcomes.
        """
        emails = [contract.homeowner.email for contract in self.contracts.get_contracts()]
        results = await asyncio.gather(
            *(self.contract_service.make_payment(email) for email in emails),
            return_exceptions=True,
        )

        failed = 0
        for email, result in zip(emails, results):
            if isinstance(result, Exception):
                failed += 1
                logger.error(f"Payment failed for {email}: {result}", extra={"email": email})

        paid = sum(1 for result in results if isinstance(result, Payment))
        summary = PaymentRunSummary(
            month=self.calendar.current_month,
            paid=paid,
            not_due=len(results) - paid - failed,
            failed=failed,
        )

        calendar_month_gauge.set(self.calendar.add_month())
        log_payment_run(summary.month, summary.paid, summary.not_due, summary.failed)
        return summary

    def get_option_details(self, option: str, email: str) -> Dict[str, Any]:
        """
        Quote a financing option for a homeowner.

        Raises:
            InvalidOptionError: If option is not "0", "1" or "2"
            NotFoundError: If the homeowner does not exist
        """
        contract_option = get_contract_option(option)
        homeowner = self._get_by_email(email)
        proposed = self.contract_service.create_contract(contract_option.contract_size, homeowner.id, preview=True)
        return {
            "electricity": contract_option.electricity,
            "contract_size": contract_option.contract_size,
            "monthly_payment": proposed.monthly_payment,
        }
