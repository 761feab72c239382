from prometheus_client import Counter, Histogram

# Business Metrics
ecomm_orders_total = Counter(
    "ecomm_orders_total",
    "Total order placements processed",
    ["status"] # Labels: 'success', 'rejected', 'failed'
)

ecomm_order_duration_seconds = Histogram(
    "ecomm_order_duration_seconds",
    "Order placement transaction duration in seconds"
)

ecomm_order_rejections_total = Counter(
    "ecomm_order_rejections_total",
    "Orders rejected by the stock check",
    ["reason"] # Labels: 'missing_product', 'insufficient_stock'
)

ecomm_demo_script_runs_total = Counter(
    "ecomm_demo_script_runs_total",
    "Demo control script invocations",
    ["command", "status"]
)
