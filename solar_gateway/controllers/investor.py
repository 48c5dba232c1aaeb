"""Investor controller - investors buying into contracts"""

import logging
import uuid
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from solar_gateway.config import settings
from solar_gateway.domain.exceptions import ConflictError, NotFoundError, ValidationError
from solar_gateway.domain.financing import calculate_carbon_reduction, parse_amount
from solar_gateway.domain.models import StoredInvestorStat
from solar_gateway.infrastructure.database.models import Investment, Investor
from solar_gateway.infrastructure.database.repositories import ContractRepository, InvestorRepository
from solar_gateway.infrastructure.observability.metrics import investment_counter

logger = logging.getLogger(__name__)


class InvestorController:
    def __init__(self, db: Session):
        self.db = db
        self.investors = InvestorRepository(db)
        self.contracts = ContractRepository(db)

    def _get_by_email(self, email: str) -> Investor:
        investor = self.investors.get_one_by_email(email)
        if investor is None:
            raise NotFoundError(f"Investor {email} not found")
        return investor

    def create_investor(self, investor: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if not investor:
            raise ValidationError("One or more of the required parameters was missing.")

        if self.investors.get_one_by_email(investor["email"]) is not None:
            raise ConflictError(f"Investor {investor['email']} already exists")

        self.investors.add(name=investor["name"], email=investor["email"])
        self.db.commit()
        return investor

    def invest(self, email: str, contract_id: uuid.UUID, amount: Any) -> Investment:
        """
        Buy a share of a contract.

        Raises:
            ValidationError: If the amount is missing or not numeric
            NotFoundError: If the investor or contract does not exist
            ConflictError: If the amount exceeds the contract's unsold amount
        """
        value = parse_amount(amount)
        investor = self._get_by_email(email)
        contract = self.contracts.get_contract(contract_id)

        if value > contract.unsold_amount:
            raise ConflictError(
                f"Investment of {value} exceeds unsold amount {contract.unsold_amount} of contract {contract_id}"
            )

        investment = self.investors.create_investment(contract, investor, value)
        self.db.commit()

        investment_counter.inc()
        logger.info(
            "Investment recorded",
            extra={
                "investor": email,
                "contract_id": str(contract_id),
                "amount": value,
                "unsold_amount": contract.unsold_amount,
            },
        )
        return investment

    def get_investor_stats(self, email: str) -> StoredInvestorStat:
        investor = self._get_by_email(email)
        investments = self.investors.get_investments(investor.id)
        return StoredInvestorStat.from_raw(
            carbon_reduction=calculate_carbon_reduction(investments, settings.carbon_kg_per_dollar),
            total_portfolio=sum(investment.amount for investment in investments),
            target_rate=settings.investor_target_rate,
        )
