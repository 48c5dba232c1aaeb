"""Unit tests for contract sizing and payment arithmetic"""

import uuid
import pytest
from types import SimpleNamespace
from solar_gateway.domain.exceptions import InvalidOptionError, ValidationError
from solar_gateway.domain.financing import (
    calculate_carbon_reduction,
    calculate_funded_fraction,
    calculate_monthly_payment,
    get_contract_option,
    parse_amount,
    split_payment,
)
from solar_gateway.domain.models import StoredInvestorStat


def _investment(amount: float) -> SimpleNamespace:
    return SimpleNamespace(id=uuid.uuid4(), owner_id=uuid.uuid4(), amount=amount)


@pytest.mark.parametrize(
    "option,contract_size,electricity",
    [("0", 6000, 60), ("1", 10000, 100), ("2", 15000, 150)],
)
def test_contract_options(option, contract_size, electricity):
    """Test the three fixed financing options"""
    contract_option = get_contract_option(option)
    assert contract_option.contract_size == contract_size
    assert contract_option.electricity == electricity


@pytest.mark.parametrize("option", ["3", "-1", "", "one"])
def test_contract_option_invalid(option):
    with pytest.raises(InvalidOptionError):
        get_contract_option(option)


def test_invalid_option_is_validation_error():
    """Invalid options share the validation error status"""
    assert issubclass(InvalidOptionError, ValidationError)


def test_monthly_payment_amortized():
    """$10,000 over 20 years at 4% is $60.60 a month"""
    assert calculate_monthly_payment(10000, 240, 0.04) == 60.60


def test_monthly_payment_zero_rate():
    """Zero interest splits the sale amount evenly"""
    assert calculate_monthly_payment(6000, 240, 0.0) == 25.0


def test_monthly_payment_covers_principal():
    """Total paid over the term is never below the sale amount"""
    payment = calculate_monthly_payment(15000, 240, 0.04)
    assert payment * 240 > 15000


def test_monthly_payment_invalid_length():
    with pytest.raises(ValidationError):
        calculate_monthly_payment(6000, 0, 0.04)


def test_funded_fraction():
    assert calculate_funded_fraction(2500, 10000) == 0.25
    assert calculate_funded_fraction(10000, 10000) == 1.0


def test_funded_fraction_zero_sale_amount():
    """Guard against division by zero"""
    assert calculate_funded_fraction(0, 0) == 0.0


@pytest.mark.parametrize("value,expected", [(100, 100.0), (250.5, 250.5), ("6000", 6000.0)])
def test_parse_amount_valid(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", [None, "abc", "", True, 0, -5, [], {}, "nan"])
def test_parse_amount_invalid(value):
    with pytest.raises(ValidationError):
        parse_amount(value)


@pytest.mark.parametrize("value,expected", [(0, 0.0), (-5, -5.0), ("-250", -250.0)])
def test_parse_amount_allows_non_positive(value, expected):
    assert parse_amount(value, positive=False) == expected


@pytest.mark.parametrize("value", [None, True, "abc", "nan", "inf"])
def test_parse_amount_non_positive_still_rejects_garbage(value):
    with pytest.raises(ValidationError):
        parse_amount(value, positive=False)


def test_split_payment_zero_sale_amount():
    """A zero-sized contract has nothing sold, so the payment is all unsold"""
    shares, unsold_share = split_payment(0.0, 0, [])
    assert shares == []
    assert unsold_share == 0.0


def test_split_payment_pro_rata():
    """Each investment receives its share; the rest is unsold"""
    investments = [_investment(5000), _investment(2500)]
    shares, unsold_share = split_payment(100.0, 10000, investments)

    assert [s.amount for s in shares] == [50.0, 25.0]
    assert unsold_share == 25.0
    assert shares[0].investment_id == investments[0].id
    assert shares[0].owner_id == investments[0].owner_id


def test_split_payment_totals_match():
    """Rounded shares plus unsold share equal the monthly payment"""
    investments = [_investment(3333), _investment(3333), _investment(3334)]
    shares, unsold_share = split_payment(60.6, 10000, investments)

    assert round(sum(s.amount for s in shares) + unsold_share, 2) == 60.6


def test_split_payment_no_investments():
    shares, unsold_share = split_payment(60.6, 10000, [])
    assert shares == []
    assert unsold_share == 60.6


def test_carbon_reduction():
    investments = [_investment(1000), _investment(500)]
    assert calculate_carbon_reduction(investments, 0.6) == pytest.approx(900.0)


def test_investor_stat_rounding():
    """Carbon rounds to the nearest 10, portfolio to the nearest 100"""
    stat = StoredInvestorStat.from_raw(carbon_reduction=904, total_portfolio=1249, target_rate=0.05)
    assert stat.carbon_reduction == 900
    assert stat.total_portfolio == 1200
    assert stat.target_rate == 0.05


def test_investor_stat_rounds_half_up():
    stat = StoredInvestorStat.from_raw(carbon_reduction=905, total_portfolio=1250, target_rate=0.05)
    assert stat.carbon_reduction == 910
    assert stat.total_portfolio == 1300
