"""Unit tests for contract creation and monthly payments"""

import asyncio
import pytest
from solar_gateway.domain.exceptions import ConflictError, NotFoundError
from solar_gateway.domain.models import StorableContract
from solar_gateway.infrastructure.database.models import Contract
from solar_gateway.infrastructure.database.repositories import InvestorRepository, PaymentRepository


def test_create_contract_persists(db, contract_service, make_homeowner):
    homeowner = make_homeowner()
    contract = contract_service.create_contract(10000, homeowner.id)

    assert isinstance(contract, Contract)
    assert contract.monthly_payment == 60.60
    assert contract.total_length == 240
    assert contract.first_payment_date == 1  # Due the month after sign-up
    assert db.query(Contract).count() == 1


def test_create_contract_preview_not_persisted(db, contract_service, make_homeowner):
    """Preview quotes terms without writing anything"""
    homeowner = make_homeowner()
    preview = contract_service.create_contract(10000, homeowner.id, preview=True)

    assert isinstance(preview, StorableContract)
    assert preview.monthly_payment == 60.60
    assert db.query(Contract).count() == 0


def test_create_contract_twice_conflicts(contract_service, make_homeowner):
    homeowner = make_homeowner()
    contract_service.create_contract(10000, homeowner.id)

    with pytest.raises(ConflictError):
        contract_service.create_contract(6000, homeowner.id)


def test_make_payment_not_due_before_first_month(contract_service, make_homeowner):
    homeowner = make_homeowner()
    contract_service.create_contract(10000, homeowner.id)

    assert asyncio.run(contract_service.make_payment(homeowner.email)) is None


def test_make_payment_catch_up_records_installment_month(db, contract_service, calendar, make_homeowner):
    """Months missed while the calendar moved on are settled in order"""
    homeowner = make_homeowner()
    contract = contract_service.create_contract(10000, homeowner.id)
    for _ in range(3):
        calendar.add_month()

    first = asyncio.run(contract_service.make_payment(homeowner.email))
    second = asyncio.run(contract_service.make_payment(homeowner.email))

    assert (first.month, second.month) == (1, 2)
    db.refresh(contract)
    assert contract.first_payment_date == 3


def test_make_payment_splits_across_investors(db, contract_service, calendar, make_homeowner, make_investor):
    homeowner = make_homeowner()
    contract = contract_service.create_contract(10000, homeowner.id)
    InvestorRepository(db).create_investment(contract, make_investor(), 5000)
    db.commit()
    calendar.add_month()

    payment = asyncio.run(contract_service.make_payment(homeowner.email))

    assert payment is not None
    assert payment.month == 1
    assert payment.amount == 60.60
    assert [s.amount for s in payment.shares] == [30.30]
    assert payment.unsold_share == 30.30

    db.refresh(contract)
    assert contract.first_payment_date == 2
    assert PaymentRepository(db).count_for_contract(contract.id) == 1


def test_make_payment_once_per_month(contract_service, calendar, make_homeowner):
    """A second attempt in the same month finds nothing due"""
    homeowner = make_homeowner()
    contract_service.create_contract(10000, homeowner.id)
    calendar.add_month()

    assert asyncio.run(contract_service.make_payment(homeowner.email)) is not None
    assert asyncio.run(contract_service.make_payment(homeowner.email)) is None


def test_make_payment_stops_after_term(db, calendar, make_homeowner):
    from solar_gateway.services.contracts import ContractService

    service = ContractService(db, calendar, length_months=2, annual_rate=0.0)
    homeowner = make_homeowner()
    service.create_contract(1000, homeowner.id)

    paid = []
    for _ in range(4):
        calendar.add_month()
        paid.append(asyncio.run(service.make_payment(homeowner.email)))

    assert [p is not None for p in paid] == [True, True, False, False]
    assert paid[0].amount == 500.0


def test_make_payment_unknown_homeowner(contract_service):
    with pytest.raises(NotFoundError):
        asyncio.run(contract_service.make_payment("missing@example.com"))


def test_make_payment_without_contract(contract_service, make_homeowner):
    homeowner = make_homeowner()
    with pytest.raises(NotFoundError):
        asyncio.run(contract_service.make_payment(homeowner.email))
