"""Prometheus metrics declarations.

Labels use only static enumerations, never order, product or user IDs.
"""

from prometheus_client import Counter, Histogram

WORKFLOWS_TOTAL = Counter(
    "storefront_workflows_total",
    "Completed multi-step write workflows",
    ["workflow", "outcome"],
)

WORKFLOW_DURATION_SECONDS = Histogram(
    "storefront_workflow_duration_seconds",
    "Workflow duration in seconds",
    ["workflow"],
)

COMPENSATIONS_TOTAL = Counter(
    "storefront_compensations_total",
    "Compensating actions run after a failed workflow step",
    ["workflow", "outcome"],
)

ORDER_REVENUE_TOTAL = Counter(
    "storefront_order_revenue_total",
    "Sum of placed order totals",
)
