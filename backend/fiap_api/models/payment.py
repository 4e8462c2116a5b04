"""
Tabela de pagamentos
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, DECIMAL, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from fiap_api.core.database import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)

    amount = Column(DECIMAL(12, 2), nullable=False)
    status = Column(String(50), nullable=False, index=True)
    status_detail = Column(String(255))

    # Provedor
    provider = Column(String(50), nullable=False, default="mercadopago", server_default="mercadopago")
    provider_payment_id = Column(String(100), index=True)
    payment_method = Column(String(50))
    qr_code = Column(Text)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    order = relationship("Order", back_populates="payments")
