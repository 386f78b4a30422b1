from prometheus_client import Counter, Histogram

DB_QUERY_TOTAL = Counter(
    "sqlfrag_db_query_total",
    "Repository queries executed, by table, operation and outcome",
    ["table", "op_type", "status"],
)

DB_QUERY_LATENCY_SECONDS = Histogram(
    "sqlfrag_db_query_latency_seconds",
    "Repository query latency in seconds",
    ["table", "op_type"],
)
