from models import db, BIGINT
from datetime import datetime


class CartItem(db.Model):
    __tablename__ = "cart_items"
    __table_args__ = (
        db.UniqueConstraint("user_id", "book_id", name="uq_cart_items_user_book"),
        db.CheckConstraint("quantity > 0", name="ck_cart_items_quantity_positive"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(BIGINT, db.ForeignKey("books.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    book = db.relationship("Book")

    def to_dict(self, include_book=False):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "book_id": self.book_id,
            "quantity": self.quantity,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_book:
            data["book"] = self.book.to_dict() if self.book else None
        return data
