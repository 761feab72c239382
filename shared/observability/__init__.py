from .setup import setup_observability, configure_logging
from .metrics import (
    ecomm_orders_total,
    ecomm_order_duration_seconds,
    ecomm_order_rejections_total,
    ecomm_demo_script_runs_total
)
