"""SQLAlchemy ORM models for homeowners, contracts, investments and payments"""

import uuid
from sqlalchemy import Column, Float, DateTime, Integer, ForeignKey, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Homeowner(Base):
    """Homeowner account, optionally financed through a contract"""

    __tablename__ = "homeowner"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    pwd_hash = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    contract = relationship("Contract", back_populates="homeowner", uselist=False, cascade="all, delete-orphan")


class Contract(Base):
    """Solar financing contract owned by a single homeowner"""

    __tablename__ = "contract"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    homeowner_id = Column(Uuid, ForeignKey("homeowner.id", ondelete="CASCADE"), nullable=False, unique=True)
    sale_amount = Column(Float, nullable=False)
    total_length = Column(Integer, nullable=False)
    monthly_payment = Column(Float, nullable=False)
    first_payment_date = Column(Integer, nullable=True)  # Calendar month of next payment due
    unsold_amount = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    homeowner = relationship("Homeowner", back_populates="contract")
    investments = relationship("Investment", back_populates="contract", cascade="all, delete-orphan")
    payments = relationship("ContractPayment", back_populates="contract", cascade="all, delete-orphan")


class Investor(Base):
    """Investor buying shares of contracts"""

    __tablename__ = "investor"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    investments = relationship("Investment", back_populates="owner")


class Investment(Base):
    """Investor stake in a contract"""

    __tablename__ = "investment"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    contract_id = Column(Uuid, ForeignKey("contract.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(Uuid, ForeignKey("investor.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    contract = relationship("Contract", back_populates="investments")
    owner = relationship("Investor", back_populates="investments")


class ContractPayment(Base):
    """Monthly payment applied to a contract"""

    __tablename__ = "contract_payment"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    contract_id = Column(Uuid, ForeignKey("contract.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(Integer, nullable=False)
    amount = Column(Float, nullable=False)
    unsold_share = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    contract = relationship("Contract", back_populates="payments")
    shares = relationship("PaymentShare", back_populates="payment", cascade="all, delete-orphan")


class PaymentShare(Base):
    """Part of a payment disbursed to one investment"""

    __tablename__ = "payment_share"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    payment_id = Column(Uuid, ForeignKey("contract_payment.id", ondelete="CASCADE"), nullable=False)
    investment_id = Column(Uuid, ForeignKey("investment.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Float, nullable=False)

    payment = relationship("ContractPayment", back_populates="shares")
