from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import ok, auth_required, transactional
from app.utils.validation import validate_schema, validate_query
from app.schemas.books import CreateBookRequest, UpdateBookRequest, BookSearchParams
from app.services import books as book_service
from app.services.reviews import list_reviews


books_bp = Blueprint("books", __name__, url_prefix=f"{API_PREFIX}/books")


@books_bp.route("", methods=["GET"])
@validate_query(BookSearchParams)
def list_books():
    params: BookSearchParams = request.validated_query
    books = book_service.list_books(limit=params.limit, offset=params.offset)
    return ok([b.to_dict() for b in books])


@books_bp.route("/search", methods=["GET"])
@validate_query(BookSearchParams)
def search_books():
    params: BookSearchParams = request.validated_query
    books = book_service.search_books(**params.filters())
    return ok([b.to_dict() for b in books])


@books_bp.route("/<int:book_id>", methods=["GET"])
def get_book(book_id):
    book = book_service.get_book(book_id)
    if not book:
        return ok(message="Book not found")
    return ok(book.to_dict())


@books_bp.route("", methods=["POST"])
@auth_required
@validate_schema(CreateBookRequest)
def create_book():
    data: CreateBookRequest = request.validated_data
    with transactional("Failed to create book"):
        book = book_service.create_book(**data.model_dump())
    return ok(book.to_dict(), "Book created", 201)


@books_bp.route("/<int:book_id>", methods=["PATCH"])
@auth_required
@validate_schema(UpdateBookRequest)
def update_book(book_id):
    data: UpdateBookRequest = request.validated_data
    with transactional("Failed to update book"):
        book = book_service.update_book(book_id, data.patch())
    return ok(book.to_dict(), "Book updated")


@books_bp.route("/<int:book_id>/reviews", methods=["GET"])
def book_reviews(book_id):
    reviews = list_reviews(book_id)
    return ok([r.to_dict(include_reviewer=True) for r in reviews])
