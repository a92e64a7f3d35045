import logging
from sqlalchemy.orm import joinedload
from models import db
from models.book import Book
from models.cart import CartItem
from app.exceptions import InsufficientStock, NotFound, ValidationError

logger = logging.getLogger(__name__)


def _check_quantity(quantity):
    if not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("Quantity must be at least 1")


def add_to_cart(user_id: int, book_id: int, quantity: int = 1) -> CartItem:
    """Add a book to the cart, merging with an existing line for the same book.

    Both the requested quantity and the merged quantity must fit in the
    current stock. Does NOT commit.
    """
    _check_quantity(quantity)
    book = db.session.get(Book, book_id)
    if not book:
        raise NotFound("Book not found")
    if quantity > book.stock_quantity:
        raise InsufficientStock(
            f"Insufficient stock for {book.title}. Available: {book.stock_quantity}, requested: {quantity}",
            titles=[book.title],
        )

    cart_item = CartItem.query.filter_by(user_id=user_id, book_id=book_id).first()
    if cart_item:
        new_quantity = cart_item.quantity + quantity
        if new_quantity > book.stock_quantity:
            raise InsufficientStock(
                f"Insufficient stock for {book.title}. Available: {book.stock_quantity}, "
                f"in cart: {cart_item.quantity}, requested: {quantity}",
                titles=[book.title],
            )
        cart_item.quantity = new_quantity
    else:
        cart_item = CartItem(user_id=user_id, book_id=book_id, quantity=quantity)
        db.session.add(cart_item)
    db.session.flush()
    return cart_item


def update_cart_item(user_id: int, cart_item_id: int, quantity: int) -> CartItem:
    _check_quantity(quantity)
    cart_item = CartItem.query.filter_by(id=cart_item_id, user_id=user_id).first()
    if not cart_item:
        raise NotFound("Item not found in cart")
    book = cart_item.book
    if quantity > book.stock_quantity:
        raise InsufficientStock(
            f"Insufficient stock for {book.title}. Available: {book.stock_quantity}, requested: {quantity}",
            titles=[book.title],
        )
    cart_item.quantity = quantity
    db.session.flush()
    return cart_item


def remove_from_cart(user_id: int, cart_item_id: int) -> bool:
    """Delete one of the caller's cart lines. False when nothing matched."""
    deleted = CartItem.query.filter_by(id=cart_item_id, user_id=user_id).delete(
        synchronize_session=False
    )
    return deleted > 0


def get_cart(user_id: int):
    return (
        CartItem.query.options(joinedload(CartItem.book))
        .filter_by(user_id=user_id)
        .order_by(CartItem.created_at.asc(), CartItem.id.asc())
        .all()
    )
