"""Contract sizing and payment arithmetic for solar financing"""

import math
from typing import Dict, Iterable, List, Tuple
from solar_gateway.domain.models import ContractOption, PaymentShare
from solar_gateway.domain.exceptions import InvalidOptionError, ValidationError


CONTRACT_OPTIONS: Dict[str, ContractOption] = {
    "0": ContractOption(contract_size=6000, electricity=60),
    "1": ContractOption(contract_size=10000, electricity=100),
    "2": ContractOption(contract_size=15000, electricity=150),
}


def get_contract_option(option: str) -> ContractOption:
    """Look up a financing option by its key ("0", "1" or "2")"""
    try:
        return CONTRACT_OPTIONS[str(option)]
    except KeyError:
        raise InvalidOptionError(f"Invalid option: {option}") from None


def parse_amount(value, positive: bool = True) -> float:
    """
    Validate a monetary amount coming from a request body.

    Accepts ints, floats and numeric strings. Booleans, non-numeric strings,
    NaN and infinities are rejected, as are non-positive values unless
    positive=False.

    Raises:
        ValidationError: If the amount is missing or unusable
    """
    if value is None or isinstance(value, bool):
        raise ValidationError("Bad amount")

    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Bad amount") from None

    if not math.isfinite(amount) or (positive and amount <= 0):
        raise ValidationError("Bad amount")

    return amount


def calculate_monthly_payment(sale_amount: float, length_months: int, annual_rate: float) -> float:
    """
    Fixed monthly payment that amortizes sale_amount over length_months.

    Standard annuity formula:
        payment = P * r / (1 - (1 + r) ** -n), r = annual_rate / 12

    A zero rate degenerates to a straight split (P / n).

    Example:
        $10,000 over 240 months at 4% → $60.60
    """
    if length_months <= 0:
        raise ValidationError("Contract length must be positive")

    if sale_amount <= 0:
        return 0.0

    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return round(sale_amount / length_months, 2)

    payment = sale_amount * monthly_rate / (1 - (1 + monthly_rate) ** -length_months)
    return round(payment, 2)


def calculate_funded_fraction(investment_value: float, sale_amount: float) -> float:
    """Fraction of the contract covered by investments (0.0 for empty contracts)"""
    if sale_amount <= 0:
        return 0.0
    return investment_value / sale_amount


def split_payment(
    monthly_payment: float,
    sale_amount: float,
    investments: Iterable,
) -> Tuple[List[PaymentShare], float]:
    """
    Distribute a monthly payment across a contract's investments.

    Each investment receives monthly_payment * amount / sale_amount, rounded
    to cents. Whatever is left belongs to the unsold portion of the contract,
    so shares + unsold share always equal the monthly payment.

    Returns:
        (shares, unsold_share)
    """
    shares = []
    if sale_amount > 0:
        for investment in investments:
            amount = round(monthly_payment * investment.amount / sale_amount, 2)
            shares.append(
                PaymentShare(
                    investment_id=investment.id,
                    owner_id=investment.owner_id,
                    amount=amount,
                )
            )

    unsold_share = round(monthly_payment - sum(s.amount for s in shares), 2)
    return shares, unsold_share


def calculate_carbon_reduction(investments: Iterable, carbon_kg_per_dollar: float) -> float:
    """Yearly CO2 reduction (kg) credited to the dollars an investor financed"""
    return sum(investment.amount for investment in investments) * carbon_kg_per_dollar
