from prometheus_client import Counter

USER_AGGREGATIONS = Counter(
    "user_aggregations_total",
    "Single-user enriched fetches, by outcome",
    ["outcome"]
)

REMOTE_CALLS = Counter(
    "remote_calls_total",
    "Outbound calls to peer services",
    ["service", "operation", "outcome"]
)
