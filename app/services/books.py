from decimal import Decimal
from sqlalchemy import func, or_
from models import db
from models.book import Book
from models.money import to_money
from app.exceptions import NotFound, ValidationError

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

BOOK_FIELDS = (
    "title",
    "author",
    "isbn",
    "description",
    "price",
    "stock_quantity",
    "category",
    "publication_year",
    "publisher",
    "cover_image_url",
)
REQUIRED_FIELDS = ("title", "author", "price", "stock_quantity", "category")


def _clean(fields: dict) -> dict:
    unknown = set(fields) - set(BOOK_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown book fields: {', '.join(sorted(unknown))}")
    data = dict(fields)
    if "price" in data and data["price"] is not None:
        data["price"] = to_money(data["price"])
        if data["price"] <= 0:
            raise ValidationError("price must be greater than 0")
    if "stock_quantity" in data and data["stock_quantity"] is not None:
        if data["stock_quantity"] < 0:
            raise ValidationError("stock_quantity cannot be negative")
    return data


def create_book(**fields) -> Book:
    data = _clean(fields)
    missing = [f for f in REQUIRED_FIELDS if data.get(f) is None]
    if missing:
        raise ValidationError(f"Missing fields: {', '.join(missing)}")
    book = Book(**data)
    db.session.add(book)
    db.session.flush()
    return book


def update_book(book_id: int, patch: dict) -> Book:
    """Apply a partial update; keys absent from ``patch`` keep their value."""
    book = db.session.get(Book, book_id)
    if not book:
        raise NotFound("Book not found")
    data = _clean(patch)
    for name in REQUIRED_FIELDS:
        if name in data and data[name] is None:
            raise ValidationError(f"{name} cannot be null")
    for name, value in data.items():
        setattr(book, name, value)
    db.session.flush()
    return book


def get_book(book_id: int):
    return db.session.get(Book, book_id)


def search_books(
    query=None,
    category=None,
    author=None,
    min_price=None,
    max_price=None,
    limit=DEFAULT_PAGE_SIZE,
    offset=0,
):
    """Filter the catalog; every filter is optional and they combine with AND."""
    q = Book.query
    if query:
        pattern = f"%{query.strip()}%"
        q = q.filter(
            or_(
                Book.title.ilike(pattern),
                Book.author.ilike(pattern),
                Book.description.ilike(pattern),
            )
        )
    if category:
        q = q.filter(func.lower(Book.category) == category.strip().lower())
    if author:
        q = q.filter(Book.author.ilike(f"%{author.strip()}%"))
    if min_price is not None:
        q = q.filter(Book.price >= Decimal(str(min_price)))
    if max_price is not None:
        q = q.filter(Book.price <= Decimal(str(max_price)))

    limit = max(1, min(int(limit or DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE))
    offset = max(0, int(offset or 0))
    return (
        q.order_by(Book.created_at.desc(), Book.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def list_books(limit=DEFAULT_PAGE_SIZE, offset=0):
    return search_books(limit=limit, offset=offset)
