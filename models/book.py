# --- models/book.py ---
from models import db, BIGINT
from datetime import datetime
from models.money import money_to_float


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("price > 0", name="ck_books_price_positive"),
        db.CheckConstraint("stock_quantity >= 0", name="ck_books_stock_non_negative"),
        db.Index("ix_books_category", "category"),
        db.Index("ix_books_created_at", "created_at"),
    )

    id = db.Column(BIGINT, primary_key=True)

    # Core details
    title = db.Column(db.String(255), nullable=False)
    author = db.Column(db.String(255), nullable=False)
    isbn = db.Column(db.String(20), nullable=True)
    description = db.Column(db.Text, nullable=True)

    # Pricing & inventory
    price = db.Column(db.Numeric(10, 2), nullable=False)
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)

    # Catalog metadata
    category = db.Column(db.String(100), nullable=False)
    publication_year = db.Column(db.Integer, nullable=True)
    publisher = db.Column(db.String(255), nullable=True)

    # Media
    cover_image_url = db.Column(db.String(500), nullable=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "description": self.description,
            "price": money_to_float(self.price),
            "stock_quantity": self.stock_quantity,
            "category": self.category,
            "publication_year": self.publication_year,
            "publisher": self.publisher,
            "cover_image_url": self.cover_image_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def summary(self):
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "cover_image_url": self.cover_image_url,
        }

    def __repr__(self):
        return f"<Book id={self.id} title={self.title!r}>"
