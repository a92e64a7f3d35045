from flask import Blueprint, request, g
from app.version import API_PREFIX
from app.utils import ok, auth_required, transactional
from app.utils.validation import validate_schema
from app.schemas.cart import AddToCartRequest, UpdateCartItemRequest, RemoveFromCartRequest
from app.services import cart as cart_service


cart_bp = Blueprint("cart", __name__, url_prefix=f"{API_PREFIX}/cart")


@cart_bp.route("/add", methods=["POST"])
@auth_required
@validate_schema(AddToCartRequest)
def add_to_cart():
    data: AddToCartRequest = request.validated_data
    with transactional("Failed to add to cart"):
        cart_item = cart_service.add_to_cart(g.user_id, data.book_id, data.quantity)
    return ok(cart_item.to_dict(include_book=True), "Item added to cart")


@cart_bp.route("/update", methods=["POST"])
@auth_required
@validate_schema(UpdateCartItemRequest)
def update_cart_item():
    data: UpdateCartItemRequest = request.validated_data
    with transactional("Failed to update cart quantity"):
        cart_item = cart_service.update_cart_item(g.user_id, data.cart_item_id, data.quantity)
    return ok(cart_item.to_dict(include_book=True), "Cart quantity updated")


@cart_bp.route("/remove", methods=["POST"])
@auth_required
@validate_schema(RemoveFromCartRequest)
def remove_from_cart():
    data: RemoveFromCartRequest = request.validated_data
    with transactional("Failed to remove item from cart"):
        removed = cart_service.remove_from_cart(g.user_id, data.cart_item_id)
    return ok({"removed": removed}, "Item removed from cart" if removed else "Item not in cart")


@cart_bp.route("", methods=["GET"])
@auth_required
def view_cart():
    items = cart_service.get_cart(g.user_id)
    return ok([ci.to_dict(include_book=True) for ci in items])
