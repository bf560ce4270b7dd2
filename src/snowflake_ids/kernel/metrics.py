"""
Prometheus metrics collection for snowflake-ids.

Counters are process-wide and labelled by node id, so several generator
instances in one process report separately.
"""

from prometheus_client import Counter

ids_generated_total = Counter(
    "snowflake_ids_generated_total",
    "Total number of identifiers emitted",
    ["node_id"],
)

sequence_exhaustions_total = Counter(
    "snowflake_sequence_exhaustions_total",
    "Total number of times a millisecond's sequence space was used up",
    ["node_id"],
)

clock_regressions_total = Counter(
    "snowflake_clock_regressions_total",
    "Total number of generation attempts rejected because the clock moved backwards",
    ["node_id"],
)
