import logging
from flask import Blueprint, request, g, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.utils import ok, auth_required, transactional
from app.utils.validation import validate_schema
from app.schemas.orders import PlaceOrderRequest
from app.services.order_service import place_order, list_orders, get_order
from app.metrics import record_order_placed

logger = logging.getLogger(__name__)

orders_bp = Blueprint("orders", __name__, url_prefix=f"{API_PREFIX}/orders")


@orders_bp.route("", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
@auth_required
@validate_schema(PlaceOrderRequest)
def create_order():
    data: PlaceOrderRequest = request.validated_data
    with transactional("Order placement failed"):
        order = place_order(g.user_id, data.shipping_address)

    record_order_placed(order.total_amount)
    logger.info({
        "event": "order_placed",
        "order_id": order.id,
        "user_id": g.user_id,
        "total_amount": str(order.total_amount),
    })
    return ok(order.to_dict(), "Order placed successfully", 201)


@orders_bp.route("", methods=["GET"])
@auth_required
def order_history():
    orders = list_orders(g.user_id)
    return ok([o.to_dict() for o in orders])


@orders_bp.route("/<int:order_id>", methods=["GET"])
@auth_required
def order_detail(order_id):
    order = get_order(g.user_id, order_id)
    if not order:
        return ok(message="Order not found")
    return ok(order.to_dict())
