from datetime import datetime

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, String, Text, Enum as SQLEnum, func, CheckConstraint
from sqlalchemy.orm import relationship

from enums.delivery_mode import DeliveryMode
from enums.order_status import OrderStatus
from enums.payment_method import PaymentMethod
from models.base import Base
from models.checkout import ContactDTO, DeliveryDTO, PaymentDTO
from models.discount import DiscountAllocationDTO


class WebOrder(Base):
    """Order received from the web storefront, stored for the POS."""
    __tablename__ = 'web_orders'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(32), nullable=False, unique=True)
    status = Column(SQLEnum(OrderStatus), nullable=False, default=OrderStatus.PENDING)
    origin = Column(String(20), nullable=False, default="web")

    client_name = Column(String(200), nullable=False)
    client_phone = Column(String(32), nullable=False)

    delivery_mode = Column(SQLEnum(DeliveryMode), nullable=False)
    delivery_address = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    payment_method = Column(SQLEnum(PaymentMethod), nullable=False)
    cash_amount = Column(Float, nullable=True)
    exact_change = Column(Integer, nullable=False, default=0)

    subtotal = Column(Float, nullable=False)
    delivery_surcharge = Column(Float, nullable=False, default=0.0)
    discount_total = Column(Float, nullable=False, default=0.0)
    grand_total = Column(Float, nullable=False)
    # JSON list of {"promotionName": ..., "amount": ...} for the kitchen screen
    discounts_json = Column(Text, nullable=True)

    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=func.now())
    estimated_ready_at = Column(DateTime, nullable=True)

    items = relationship('WebOrderItem', back_populates='order', cascade='all, delete-orphan')

    __table_args__ = (
        CheckConstraint('grand_total >= 0', name='check_web_order_grand_total_non_negative'),
    )


class WebOrderItem(Base):
    __tablename__ = 'web_order_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey('web_orders.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(Integer, nullable=False)
    name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    subtotal = Column(Float, nullable=False)
    customization = Column(Text, nullable=True)

    order = relationship('WebOrder', back_populates='items')

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_web_order_item_quantity_positive'),
    )


class OrderLineDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int
    name: str
    quantity: int
    unit_price: float
    subtotal: float
    customization: str = ""


class OrderDTO(BaseModel):
    """Immutable snapshot of a placed order."""
    model_config = ConfigDict(frozen=True)

    order_number: str
    lines: tuple[OrderLineDTO, ...]
    subtotal: float
    delivery_surcharge: float
    discounts: tuple[DiscountAllocationDTO, ...] = ()
    discount_total: float = 0.0
    grand_total: float
    contact: ContactDTO
    delivery: DeliveryDTO
    payment: PaymentDTO
    notes: str | None = None
    created_at: datetime
    estimated_ready_at: datetime | None = None

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def to_payload(self) -> dict:
        """
        Serialize to the payload shared with notification and persistence
        collaborators (camelCase keys, ISO timestamps).
        """
        delivery = {"mode": self.delivery.mode.value}
        if self.delivery.address:
            delivery["address"] = self.delivery.address
        if self.delivery.coordinates:
            delivery["coordinates"] = {
                "lat": self.delivery.coordinates.lat,
                "lng": self.delivery.coordinates.lng,
            }

        payment = {"method": self.payment.method.value}
        if self.payment.cash_amount is not None:
            payment["cashAmount"] = self.payment.cash_amount
        if self.payment.exact_change:
            payment["exactChange"] = True

        payload = {
            "orderNumber": self.order_number,
            "contact": {"name": self.contact.name, "phone": self.contact.phone},
            "delivery": delivery,
            "payment": payment,
            "items": [
                {
                    "name": line.name,
                    "quantity": line.quantity,
                    "unitPrice": line.unit_price,
                    "subtotal": line.subtotal,
                    "customization": line.customization,
                }
                for line in self.lines
            ],
            "subtotal": self.subtotal,
            "deliverySurcharge": self.delivery_surcharge,
            "discounts": [
                {"promotionName": allocation.promotion_name, "amount": allocation.amount}
                for allocation in self.discounts
            ],
            "grandTotal": self.grand_total,
            "createdAt": self.created_at.isoformat(),
        }
        if self.notes:
            payload["notes"] = self.notes
        return payload


class NotificationResultDTO(BaseModel):
    success: bool
    recipients_total: int
    recipients_notified: int
    failed_recipients: list[str] = []


class WaiterCallResultDTO(BaseModel):
    success: bool
    message: str
    recipients_notified: int = 0


class OrderPlacementResultDTO(BaseModel):
    success: bool
    message: str
    order_number: str | None = None
    recipients_notified: int = 0
    order: OrderDTO | None = None
