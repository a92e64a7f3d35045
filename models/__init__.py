from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .user import User  # noqa: F401
from .book import Book  # noqa: F401
from .cart import CartItem  # noqa: F401
from .order import Order, OrderItem, ORDER_STATUSES  # noqa: F401
from .review import Review  # noqa: F401
