from prometheus_client import Counter, Histogram

ORDERS_PLACED = Counter(
    "bookstore_orders_placed_total",
    "Orders successfully placed",
)

ORDER_AMOUNT = Histogram(
    "bookstore_order_amount",
    "Order total amount",
    buckets=(10, 25, 50, 100, 250, 500, 1000),
)

DOMAIN_ERRORS = Counter(
    "bookstore_domain_errors_total",
    "Domain errors surfaced to callers, by kind",
    ["code"],
)


def record_order_placed(total_amount):
    ORDERS_PLACED.inc()
    ORDER_AMOUNT.observe(float(total_amount))


def record_domain_error(code):
    DOMAIN_ERRORS.labels(code).inc()
