from prometheus_client import Counter, Histogram

# Business Metrics
ecomm_orders_total = Counter(
    "ecomm_orders_total",
    "Total orders processed",
    ["status"]  # Labels: 'placed', 'cancelled'
)

ecomm_order_value = Histogram(
    "ecomm_order_value",
    "Order totals at placement",
    buckets=(10, 25, 50, 100, 250, 500, 1000, 2500, 5000)
)

ecomm_cart_operations_total = Counter(
    "ecomm_cart_operations_total",
    "Cart mutations",
    ["operation"]  # Labels: 'add', 'update', 'remove', 'clear', 'merge', 'save_for_later', 'move_to_cart'
)

ecomm_auth_events_total = Counter(
    "ecomm_auth_events_total",
    "Authentication events",
    ["event", "outcome"]  # Labels: event='login' or 'refresh', outcome='success' or 'failure'
)
