from prometheus_client import Counter, Histogram

# Low-cardinality labels only: bucket names and keys never become label values
OPERATIONS = Counter(
    "s3util_operations_total",
    "Total storage operations",
    ["operation", "outcome"],
)

LATENCY = Histogram(
    "s3util_operation_duration_seconds",
    "Storage operation latency in seconds",
    ["operation"],
)
