"""Pydantic schemas for API request/response validation"""

import uuid
from datetime import date
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class HomeownerIn(CamelModel):
    """Homeowner fields supplied on sign-up"""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    pwd_hash: str = ""


class CreateHomeownerRequest(CamelModel):
    """Request body for POST /v1/homeowners"""

    user: Optional[HomeownerIn] = None


class ContractSchema(CamelModel):
    """Contract with funding progress"""

    id: uuid.UUID
    sale_amount: float
    total_length: int
    monthly_payment: float
    first_payment_date: Optional[int] = None
    unsold_amount: float
    funded_fraction: float
    position_in_queue: Optional[int] = None
    homeowner_id: uuid.UUID


class HomeownerSchema(CamelModel):
    """Homeowner with its contract, if any"""

    id: uuid.UUID
    name: str
    email: str
    pwd_hash: str
    contract: Optional[ContractSchema] = None


class HomeownerListResponse(CamelModel):
    """Response for GET /v1/homeowners"""

    users: List[HomeownerSchema]


class SignupRequest(CamelModel):
    """Request body for POST /v1/homeowners/{email}/signup (validated by the controller)"""

    amount: Any = None


class PaymentShareSchema(CamelModel):
    """Part of a payment disbursed to one investment"""

    investment_id: uuid.UUID
    owner_id: uuid.UUID
    amount: float


class PaymentSchema(CamelModel):
    contract_id: uuid.UUID
    month: int
    amount: float
    unsold_share: float
    shares: List[PaymentShareSchema]


class PaymentResponse(CamelModel):
    """Response for POST /v1/homeowners/{email}/payment"""

    payment: PaymentSchema


class PaymentRunResponse(CamelModel):
    """Response for POST /v1/payments/run"""

    month: int
    paid: int
    not_due: int
    failed: int


class OptionDetailsResponse(CamelModel):
    """Response for GET /v1/homeowners/{email}/options/{option}"""

    electricity: int
    contract_size: int
    monthly_payment: float


class InvestorIn(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)


class CreateInvestorRequest(CamelModel):
    """Request body for POST /v1/investors"""

    investor: Optional[InvestorIn] = None


class InvestmentRequest(CamelModel):
    """Request body for POST /v1/investors/{email}/investments"""

    contract_id: uuid.UUID
    amount: Any = None


class InvestmentSchema(CamelModel):
    id: uuid.UUID
    contract_id: uuid.UUID
    owner_id: uuid.UUID
    amount: float


class InvestorStatResponse(CamelModel):
    """Response for GET /v1/investors/{email}/stats"""

    carbon_reduction: float
    total_portfolio: float
    target_rate: float


class CalendarResponse(CamelModel):
    """Response for GET /v1/calendar"""

    month: int
    current_date: date
