"""
Payment model - lifecycle of one checkout order.

PENDING -> SUCCESS | FAILED | CANCELLED
"""
from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from chefdhundo.db.base import Base

PAYMENT_STATUSES = ("PENDING", "SUCCESS", "FAILED", "CANCELLED")
TERMINAL_PAYMENT_STATUSES = ("SUCCESS", "FAILED", "CANCELLED")


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    order_id = Column(String(45), unique=True, index=True, nullable=False)  # internal order id
    gateway_order_id = Column(String, index=True, nullable=True)  # Stripe checkout session id
    gateway_payment_id = Column(String, nullable=True)  # Stripe payment intent id

    plan_id = Column(String, nullable=False)
    plan_name = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    currency = Column(String, nullable=False, default="INR")

    status = Column(String, nullable=False, default="PENDING", index=True)
    payment_method = Column(String, nullable=True)
    payment_time = Column(DateTime(timezone=True), nullable=True)
    error_message = Column(Text, nullable=True)
    extra = Column("metadata", JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Payment(order_id='{self.order_id}', status='{self.status}')>"
