from sqlalchemy import Column, Text, DateTime, Integer, Numeric, ForeignKey
from sqlalchemy.sql import func
from models import db, BIGINT
from models.money import money_to_float

# pending -> confirmed -> shipped -> delivered, or pending/confirmed -> cancelled
ORDER_STATUSES = ("pending", "confirmed", "shipped", "delivered", "cancelled")


class Order(db.Model):
    __tablename__ = "orders"
    __table_args__ = (
        db.Index("ix_orders_user_created", "user_id", "created_at"),
        db.CheckConstraint("total_amount >= 0", name="ck_orders_total_non_negative"),
    )
    id = Column(BIGINT, primary_key=True)
    user_id = Column(BIGINT, ForeignKey("users.id"), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(
        db.Enum(*ORDER_STATUSES, name="order_status"),
        nullable=False,
        default="pending",
    )
    shipping_address = Column(Text, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    items = db.relationship(
        "OrderItem",
        backref="order",
        cascade="all, delete-orphan",
        lazy=True,
        order_by="OrderItem.id",
    )

    def to_dict(self, include_items=True):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "total_amount": money_to_float(self.total_amount),
            "status": self.status,
            "shipping_address": self.shipping_address,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_items:
            data["items"] = [oi.to_dict() for oi in self.items]
        return data


class OrderItem(db.Model):
    __tablename__ = "order_items"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )
    id = db.Column(BIGINT, primary_key=True)
    order_id = db.Column(BIGINT, db.ForeignKey("orders.id"), nullable=False, index=True)
    book_id = db.Column(BIGINT, db.ForeignKey("books.id"), nullable=False, index=True)
    quantity = db.Column(Integer, nullable=False)
    # Copied from Book.price when the order was placed; never follows later price edits.
    price_at_time = db.Column(Numeric(10, 2), nullable=False)
    created_at = db.Column(DateTime, default=func.now(), nullable=False)

    book = db.relationship("Book")

    def to_dict(self):
        return {
            "id": self.id,
            "order_id": self.order_id,
            "book_id": self.book_id,
            "quantity": self.quantity,
            "price_at_time": money_to_float(self.price_at_time),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "book": self.book.summary() if self.book else None,
        }
