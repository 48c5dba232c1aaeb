"""Data access layer for homeowners, contracts, investors and payments"""

import uuid
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload
from solar_gateway.infrastructure.database.models import (
    Homeowner,
    Contract,
    Investor,
    Investment,
    ContractPayment,
    PaymentShare,
)
from solar_gateway.domain.models import StorableContract, Payment
from solar_gateway.domain.exceptions import NotFoundError


class HomeownerRepository:
    """Repository for homeowner accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Homeowner]:
        return self.db.query(Homeowner).options(selectinload(Homeowner.contract)).all()

    def get_one(self, homeowner_id: uuid.UUID) -> Optional[Homeowner]:
        return self.db.get(Homeowner, homeowner_id)

    def get_one_by_email(self, email: str) -> Optional[Homeowner]:
        return (
            self.db.query(Homeowner)
            .options(selectinload(Homeowner.contract))
            .filter(Homeowner.email == email)
            .first()
        )

    def add(self, name: str, email: str, pwd_hash: str = "") -> Homeowner:
        """Stage a new homeowner and assign its id"""
        homeowner = Homeowner(name=name, email=email, pwd_hash=pwd_hash)
        self.db.add(homeowner)
        self.db.flush()
        return homeowner

    def delete(self, homeowner_id: uuid.UUID) -> None:
        """Delete a homeowner together with its contract"""
        homeowner = self.get_one(homeowner_id)
        if homeowner is None:
            raise NotFoundError(f"Homeowner with id {homeowner_id} not found.")
        self.db.delete(homeowner)
        self.db.flush()


class ContractRepository:
    """Repository for financing contracts and their investments"""

    def __init__(self, db: Session):
        self.db = db

    def get_contract(self, contract_id: uuid.UUID) -> Contract:
        """Fetch contract with homeowner and investments"""
        contract = (
            self.db.query(Contract)
            .options(joinedload(Contract.homeowner), selectinload(Contract.investments))
            .filter(Contract.id == contract_id)
            .first()
        )
        if contract is None:
            raise NotFoundError(f"Contract with id {contract_id} not found.")
        return contract

    def get_contracts(self, owner_id: Optional[uuid.UUID] = None) -> List[Contract]:
        """Fetch all contracts, optionally only the one owned by a homeowner"""
        query = self.db.query(Contract).options(
            joinedload(Contract.homeowner),
            selectinload(Contract.investments),
        )
        if owner_id is not None:
            query = query.filter(Contract.homeowner_id == owner_id)
        return query.all()

    def get_investments_for_contract(self, contract_id: uuid.UUID) -> List[Investment]:
        return (
            self.db.query(Investment)
            .options(joinedload(Investment.contract), joinedload(Investment.owner))
            .filter(Investment.contract_id == contract_id)
            .all()
        )

    def create_contract(self, storable: StorableContract) -> Contract:
        """
        Persist a new contract for an existing homeowner.

        The homeowner's contract reference is linked in memory only; the
        caller commits.

        Raises:
            NotFoundError: If the homeowner does not exist
        """
        homeowner = self.db.get(Homeowner, storable.homeowner_id)
        if homeowner is None:
            raise NotFoundError(f"Homeowner with id {storable.homeowner_id} not found.")

        contract = Contract(
            investments=[],
            total_length=storable.length,
            monthly_payment=storable.monthly_payment,
            sale_amount=storable.sale_amount,
            unsold_amount=storable.sale_amount,
            first_payment_date=storable.first_payment_date,
        )
        contract.homeowner = homeowner  # back_populates sets homeowner.contract
        self.db.add(contract)
        self.db.flush()
        return contract

    def save_first_payment_date(self, contract_id: uuid.UUID, first_payment_date: int) -> None:
        """Narrow update: first_payment_date is the only column written"""
        (
            self.db.query(Contract)
            .filter(Contract.id == contract_id)
            .update({Contract.first_payment_date: first_payment_date})
        )

    def get_contract_position_in_queue(self, unsold_amount: float) -> int:
        """
        0-based position of an unsold amount among contracts still selling.

        Contracts closest to fully funded (smallest unsold amount) come first.
        Equal unsold amounts share a position and the next larger amount
        counts all of them, e.g. 1000, 1000, 5000 rank 0, 0, 2.
        """
        return (
            self.db.query(func.count(Contract.id))
            .filter(Contract.unsold_amount > 0, Contract.unsold_amount < unsold_amount)
            .scalar()
        )


class InvestorRepository:
    """Repository for investors and their investments"""

    def __init__(self, db: Session):
        self.db = db

    def get_one_by_email(self, email: str) -> Optional[Investor]:
        return self.db.query(Investor).filter(Investor.email == email).first()

    def add(self, name: str, email: str) -> Investor:
        investor = Investor(name=name, email=email)
        self.db.add(investor)
        self.db.flush()
        return investor

    def create_investment(self, contract: Contract, owner: Investor, amount: float) -> Investment:
        """Record an investment and take it out of the contract's unsold amount"""
        investment = Investment(contract=contract, owner=owner, amount=amount)
        contract.unsold_amount = round(contract.unsold_amount - amount, 2)
        self.db.add(investment)
        self.db.flush()
        return investment

    def get_investments(self, owner_id: uuid.UUID) -> List[Investment]:
        return (
            self.db.query(Investment)
            .options(joinedload(Investment.contract))
            .filter(Investment.owner_id == owner_id)
            .all()
        )


class PaymentRepository:
    """Repository for the monthly payment ledger"""

    def __init__(self, db: Session):
        self.db = db

    def create_payment(self, payment: Payment) -> ContractPayment:
        """Record a payment with one share row per investment"""
        db_payment = ContractPayment(
            contract_id=payment.contract_id,
            month=payment.month,
            amount=payment.amount,
            unsold_share=payment.unsold_share,
        )
        self.db.add(db_payment)
        self.db.flush()

        for share in payment.shares:
            self.db.add(
                PaymentShare(
                    payment_id=db_payment.id,
                    investment_id=share.investment_id,
                    amount=share.amount,
                )
            )

        return db_payment

    def count_for_contract(self, contract_id: uuid.UUID) -> int:
        return (
            self.db.query(func.count(ContractPayment.id))
            .filter(ContractPayment.contract_id == contract_id)
            .scalar()
        )
