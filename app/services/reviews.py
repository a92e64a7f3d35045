import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload
from models import db
from models.book import Book
from models.order import Order, OrderItem
from models.review import Review
from app.exceptions import Conflict, Forbidden, NotFound, ValidationError

logger = logging.getLogger(__name__)


def _check_rating(rating):
    if not isinstance(rating, int) or not (1 <= rating <= 5):
        raise ValidationError("Rating must be between 1 and 5")


def has_purchased(user_id: int, book_id: int) -> bool:
    return db.session.query(
        OrderItem.query.join(Order, OrderItem.order_id == Order.id)
        .filter(Order.user_id == user_id, OrderItem.book_id == book_id)
        .exists()
    ).scalar()


def _already_reviewed(user_id: int, book_id: int) -> bool:
    return Review.query.filter_by(user_id=user_id, book_id=book_id).first() is not None


def create_review(user_id: int, book_id: int, rating: int, comment=None) -> Review:
    """Only buyers can review, once per book. Does NOT commit."""
    _check_rating(rating)
    if not db.session.get(Book, book_id):
        raise NotFound("Book not found")
    if not has_purchased(user_id, book_id):
        raise Forbidden("You can only review books you have ordered")
    if _already_reviewed(user_id, book_id):
        raise Conflict("You have already reviewed this book")

    review = Review(user_id=user_id, book_id=book_id, rating=rating, comment=comment)
    db.session.add(review)
    try:
        db.session.flush()
    except IntegrityError as e:
        raise Conflict("You have already reviewed this book") from e
    logger.info({"event": "review_created", "review_id": review.id, "book_id": book_id, "rating": rating})
    return review


def update_review(user_id: int, review_id: int, patch: dict) -> Review:
    review = db.session.get(Review, review_id)
    if not review:
        raise NotFound("Review not found")
    if review.user_id != user_id:
        raise Forbidden("You can only edit your own reviews")
    unknown = set(patch) - {"rating", "comment"}
    if unknown:
        raise ValidationError(f"Unknown review fields: {', '.join(sorted(unknown))}")
    if "rating" in patch:
        _check_rating(patch["rating"])
        review.rating = patch["rating"]
    if "comment" in patch:
        review.comment = patch["comment"]
    db.session.flush()
    return review


def delete_review(user_id: int, review_id: int) -> bool:
    deleted = Review.query.filter_by(id=review_id, user_id=user_id).delete(
        synchronize_session=False
    )
    return deleted > 0


def list_reviews(book_id: int):
    return (
        Review.query.options(joinedload(Review.user))
        .filter_by(book_id=book_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
