from .setup import setup_observability
from .metrics import (
    ecomm_orders_total,
    ecomm_order_value,
    ecomm_cart_operations_total,
    ecomm_auth_events_total
)
