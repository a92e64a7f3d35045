from flask import Blueprint, request, g
from app.version import API_PREFIX
from app.utils import ok, auth_required, transactional
from app.utils.validation import validate_schema
from app.schemas.reviews import CreateReviewRequest, UpdateReviewRequest
from app.services import reviews as review_service


reviews_bp = Blueprint("reviews", __name__, url_prefix=f"{API_PREFIX}/reviews")


@reviews_bp.route("", methods=["POST"])
@auth_required
@validate_schema(CreateReviewRequest)
def create_review():
    data: CreateReviewRequest = request.validated_data
    with transactional("Failed to create review"):
        review = review_service.create_review(g.user_id, data.book_id, data.rating, data.comment)
    return ok(review.to_dict(), "Review created", 201)


@reviews_bp.route("/<int:review_id>", methods=["PATCH"])
@auth_required
@validate_schema(UpdateReviewRequest)
def update_review(review_id):
    data: UpdateReviewRequest = request.validated_data
    with transactional("Failed to update review"):
        review = review_service.update_review(g.user_id, review_id, data.patch())
    return ok(review.to_dict(), "Review updated")


@reviews_bp.route("/<int:review_id>", methods=["DELETE"])
@auth_required
def delete_review(review_id):
    with transactional("Failed to delete review"):
        deleted = review_service.delete_review(g.user_id, review_id)
    return ok({"deleted": deleted}, "Review deleted" if deleted else "Review not found")
