"""Contract service: contract creation and monthly payments"""

import logging
import uuid
from typing import Optional, Union
from sqlalchemy.orm import Session

from solar_gateway.config import settings
from solar_gateway.domain.calendar import Calendar
from solar_gateway.domain.exceptions import ConflictError, NotFoundError
from solar_gateway.domain.financing import calculate_monthly_payment, split_payment
from solar_gateway.domain.models import Payment, StorableContract
from solar_gateway.infrastructure.database.models import Contract
from solar_gateway.infrastructure.database.repositories import (
    ContractRepository,
    HomeownerRepository,
    PaymentRepository,
)
from solar_gateway.infrastructure.observability.logging import log_payment
from solar_gateway.infrastructure.observability.metrics import contracts_created_counter, record_payment

logger = logging.getLogger(__name__)


class ContractService:
    """Creates financing contracts and applies their monthly payments"""

    def __init__(
        self,
        db: Session,
        calendar: Calendar,
        length_months: int | None = None,
        annual_rate: float | None = None,
    ):
        self.db = db
        self.calendar = calendar
        self.length_months = length_months or settings.contract_length_months
        self.annual_rate = settings.annual_interest_rate if annual_rate is None else annual_rate
        self.homeowners = HomeownerRepository(db)
        self.contracts = ContractRepository(db)
        self.payments = PaymentRepository(db)

    def create_contract(
        self,
        amount: float,
        homeowner_id: uuid.UUID,
        preview: bool = False,
    ) -> Union[Contract, StorableContract]:
        """
        Size a contract for a homeowner.

        With preview=True nothing is persisted: the computed terms are
        returned so callers can quote a monthly payment.

        Raises:
            NotFoundError: If the homeowner does not exist
            ConflictError: If the homeowner already has a contract
        """
        storable = StorableContract(
            homeowner_id=homeowner_id,
            sale_amount=amount,
            length=self.length_months,
            monthly_payment=calculate_monthly_payment(amount, self.length_months, self.annual_rate),
            first_payment_date=self.calendar.current_month + 1,
        )
        if preview:
            return storable

        homeowner = self.homeowners.get_one(homeowner_id)
        if homeowner is not None and homeowner.contract is not None:
            raise ConflictError(f"Homeowner {homeowner.email} already has a contract")

        contract = self.contracts.create_contract(storable)
        self.db.commit()

        contracts_created_counter.inc()
        logger.info(
            "Contract created",
            extra={
                "contract_id": str(contract.id),
                "homeowner_id": str(homeowner_id),
                "sale_amount": contract.sale_amount,
                "monthly_payment": contract.monthly_payment,
            },
        )
        return contract

    async def make_payment(self, email: str) -> Optional[Payment]:
        """
        Apply the homeowner's monthly payment if one is due.

        A payment is due when the contract's next payment month has been
        reached and fewer than total_length payments were made. The payment
        is split pro rata across investments; the remainder is the unsold
        share. The ledger records the installment month settled, which lags
        the calendar when payments are caught up.

        Returns:
            The applied Payment, or None when nothing is due

        Raises:
            NotFoundError: If the homeowner or its contract does not exist
        """
        homeowner = self.homeowners.get_one_by_email(email)
        if homeowner is None:
            raise NotFoundError(f"Homeowner {email} not found")
        if homeowner.contract is None:
            raise NotFoundError(f"Homeowner {email} has no contract")

        contract = homeowner.contract
        month = self.calendar.current_month
        due_month = contract.first_payment_date if contract.first_payment_date is not None else month

        try:
            payments_made = self.payments.count_for_contract(contract.id)
            if due_month > month or payments_made >= contract.total_length:
                record_payment("not_due")
                return None

            investments = self.contracts.get_investments_for_contract(contract.id)
            shares, unsold_share = split_payment(contract.monthly_payment, contract.sale_amount, investments)
            payment = Payment(
                contract_id=contract.id,
                month=due_month,
                amount=contract.monthly_payment,
                unsold_share=unsold_share,
                shares=shares,
            )

            self.payments.create_payment(payment)
            self.contracts.save_first_payment_date(contract.id, due_month + 1)
            self.db.commit()

        except Exception:
            self.db.rollback()
            record_payment("failed")
            raise

        record_payment("paid", payment.amount)
        log_payment(email, str(contract.id), due_month, payment.amount, len(shares))
        return payment
