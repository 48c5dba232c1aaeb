"""Domain models - pure Python dataclasses representing business entities"""

import math
import uuid
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class StorableContract:
    """Contract terms before they are persisted (also used for previews)"""

    homeowner_id: Optional[uuid.UUID]
    sale_amount: float
    length: int  # months
    monthly_payment: float
    first_payment_date: Optional[int] = None


@dataclass
class StoredContract:
    """Contract projection with computed funding fields"""

    id: uuid.UUID
    sale_amount: float
    total_length: int
    monthly_payment: float
    first_payment_date: Optional[int]
    unsold_amount: float
    funded_fraction: float
    position_in_queue: Optional[int]
    homeowner_id: uuid.UUID


@dataclass
class StoredHomeowner:
    """Homeowner projection returned by the API"""

    id: uuid.UUID
    name: str
    email: str
    pwd_hash: str
    contract: Optional[StoredContract] = None


def round_to_nearest(value: float, step: int) -> float:
    """Round half up to the nearest multiple of step"""
    return math.floor(value / step + 0.5) * step


@dataclass
class StoredInvestorStat:
    """Display-rounded investor aggregate"""

    carbon_reduction: float
    total_portfolio: float
    target_rate: float

    @classmethod
    def from_raw(cls, carbon_reduction: float, total_portfolio: float, target_rate: float) -> "StoredInvestorStat":
        return cls(
            carbon_reduction=round_to_nearest(carbon_reduction, 10),
            total_portfolio=round_to_nearest(total_portfolio, 100),
            target_rate=target_rate,
        )


@dataclass
class PaymentShare:
    """Portion of a monthly payment owed to one investment"""

    investment_id: uuid.UUID
    owner_id: uuid.UUID
    amount: float


@dataclass
class Payment:
    """Monthly payment applied to a contract"""

    contract_id: uuid.UUID
    month: int
    amount: float
    unsold_share: float
    shares: List[PaymentShare] = field(default_factory=list)


@dataclass
class ContractOption:
    """Fixed financing option offered to homeowners"""

    contract_size: int
    electricity: int  # Monthly electricity allowance
