from .auth import auth_bp
from .books import books_bp
from .cart import cart_bp
from .orders import orders_bp
from .reviews import reviews_bp


__all__ = [
    'auth_bp',
    'books_bp',
    'cart_bp',
    'orders_bp',
    'reviews_bp',
]
