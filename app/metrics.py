# app/metrics.py
"""
Prometheus metrics for guestbook storage monitoring.

Metrics are organized by component:
- Backends: per-command outcomes against replica / primary / memory
- Fallback: how often a request was served by the in-memory store instead
- Connections: current health of each Redis connection
"""

from prometheus_client import Counter, Gauge

# ============================================================================
# BACKEND METRICS
# ============================================================================

guestbook_backend_operations_total = Counter(
    "guestbook_backend_operations_total",
    "Storage operations by backend and result",
    ["backend", "operation", "status"],  # replica/primary/memory, read/append/info, ok/error
)

# ============================================================================
# FALLBACK METRICS
# ============================================================================

guestbook_fallback_total = Counter(
    "guestbook_fallback_total",
    "Operations served by the in-memory fallback store",
    ["operation", "reason"],  # reason: unconfigured/io_error/connect_error
)

# ============================================================================
# CONNECTION METRICS
# ============================================================================

guestbook_backend_healthy = Gauge(
    "guestbook_backend_healthy",
    "1 if the Redis connection is usable, else 0",
    ["role"],  # primary/replica
)
