import logging
from decimal import Decimal
from typing import List
from sqlalchemy.orm import selectinload
from models import db
from models.book import Book
from models.cart import CartItem
from models.money import to_money
from models.order import Order, OrderItem
from app.exceptions import EmptyCart, InsufficientStock, ValidationError
from app.telemetry import tracer

logger = logging.getLogger(__name__)

MIN_ADDRESS_LENGTH = 10


def _load_cart_snapshot(user_id: int):
    """Cart lines paired with their book, the book rows locked for update."""
    cart_items: List[CartItem] = (
        CartItem.query.filter_by(user_id=user_id)
        .order_by(CartItem.id.asc())
        .all()
    )
    if not cart_items:
        return []
    book_ids = sorted({ci.book_id for ci in cart_items})
    books = {
        b.id: b
        for b in Book.query.filter(Book.id.in_(book_ids))
        .order_by(Book.id)
        .with_for_update()
        .all()
    }
    return [(ci, books[ci.book_id]) for ci in cart_items]


def _decrement_stock(book: Book, quantity: int) -> None:
    # Guarded write: matches no row if a concurrent order already took the stock.
    updated = (
        Book.query.filter(Book.id == book.id, Book.stock_quantity >= quantity)
        .update(
            {Book.stock_quantity: Book.stock_quantity - quantity},
            synchronize_session=False,
        )
    )
    if updated != 1:
        raise InsufficientStock(titles=[book.title])


def _clear_cart(user_id: int) -> None:
    CartItem.query.filter_by(user_id=user_id).delete(synchronize_session=False)


def place_order(user_id: int, shipping_address: str) -> Order:
    """Turn the user's cart into a pending order.

    Must run inside ``transactional``: stock checks, the order and its items,
    the stock decrement and the cart clear either all commit or all roll
    back. Prices are read once and frozen into the order items.
    """
    shipping_address = (shipping_address or "").strip()
    if len(shipping_address) < MIN_ADDRESS_LENGTH:
        raise ValidationError(
            f"Shipping address must be at least {MIN_ADDRESS_LENGTH} characters"
        )

    with tracer.start_as_current_span("order.place") as span:
        span.set_attribute("user.id", user_id)

        lines = _load_cart_snapshot(user_id)
        if not lines:
            raise EmptyCart("Cart is empty")

        short = [book.title for ci, book in lines if ci.quantity > book.stock_quantity]
        if short:
            raise InsufficientStock(titles=short)

        priced = [(ci, book, to_money(book.price)) for ci, book in lines]
        total_amount = sum(
            (price * Decimal(ci.quantity) for ci, _, price in priced), Decimal("0.00")
        )
        span.set_attribute("order.lines", len(priced))

        new_order = Order(
            user_id=user_id,
            total_amount=to_money(total_amount),
            status="pending",
            shipping_address=shipping_address,
        )
        db.session.add(new_order)
        db.session.flush()

        for ci, book, price in priced:
            db.session.add(
                OrderItem(
                    order_id=new_order.id,
                    book_id=book.id,
                    quantity=ci.quantity,
                    price_at_time=price,
                )
            )

        for ci, book, _ in priced:
            _decrement_stock(book, ci.quantity)

        _clear_cart(user_id)
        db.session.flush()
        span.set_attribute("order.id", new_order.id)

    logger.debug("Order %s staged for user %s with %d line(s)", new_order.id, user_id, len(priced))
    return new_order


def list_orders(user_id: int):
    return (
        Order.query.options(selectinload(Order.items).joinedload(OrderItem.book))
        .filter_by(user_id=user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def get_order(user_id: int, order_id: int):
    """The order, or None when it does not exist or belongs to someone else."""
    return (
        Order.query.options(selectinload(Order.items).joinedload(OrderItem.book))
        .filter_by(id=order_id, user_id=user_id)
        .first()
    )
