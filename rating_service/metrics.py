from prometheus_client import Counter

RATINGS_CREATED = Counter(
    "ratings_created_total",
    "Total ratings stored by the rating service",
)

RATING_QUERIES = Counter(
    "rating_queries_total",
    "Rating lookups served, by key",
    ["key"]
)
