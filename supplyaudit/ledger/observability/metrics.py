# MIT License
# Copyright (c) 2025 Hashborn

"""
Prometheus Metrics Exporter

Exports scan progress and supply figures in Prometheus format.

Metrics:
- Accounts processed, pages fetched, scan rate
- Scan duration
- Supply metrics (total, locked, reserved, unbonding, circulating)

Supply gauges are floats, so very large balances are exported with
reduced precision. The printed summary is the exact figure.
"""

from prometheus_client import Counter, Gauge, Histogram, CollectorRegistry
import logging

logger = logging.getLogger(__name__)

# Create registry for metrics
metrics_registry = CollectorRegistry()

# ═══════════════════════════════════════════════════════════════════
# SCAN METRICS
# ═══════════════════════════════════════════════════════════════════

accounts_processed = Counter(
    'supplyaudit_accounts_processed_total',
    'Total number of accounts folded into the running totals',
    registry=metrics_registry
)

pages_fetched = Counter(
    'supplyaudit_pages_fetched_total',
    'Total number of account pages requested',
    registry=metrics_registry
)

scan_rate = Gauge(
    'supplyaudit_scan_rate_accounts_per_second',
    'Account scan throughput at the last progress report',
    registry=metrics_registry
)

scan_duration_seconds = Histogram(
    'supplyaudit_scan_duration_seconds',
    'Wall time of a complete account scan',
    buckets=[10, 30, 60, 120, 300, 600, 1800, 3600],
    registry=metrics_registry
)

# ═══════════════════════════════════════════════════════════════════
# SUPPLY METRICS
# ═══════════════════════════════════════════════════════════════════

supply_total = Gauge(
    'supplyaudit_supply_total',
    'Sum of free + reserved over all accounts',
    registry=metrics_registry
)

supply_locked = Gauge(
    'supplyaudit_supply_locked',
    'Sum of max(misc_frozen, fee_frozen) over all accounts',
    registry=metrics_registry
)

supply_reserved = Gauge(
    'supplyaudit_supply_reserved',
    'Sum of reserved balances',
    registry=metrics_registry
)

supply_unbonding = Gauge(
    'supplyaudit_supply_unbonding',
    'Sum of pending unlock chunks over all staking ledgers',
    registry=metrics_registry
)

supply_circulating = Gauge(
    'supplyaudit_supply_circulating',
    'total - locked',
    registry=metrics_registry
)


# ═══════════════════════════════════════════════════════════════════
# HELPER FUNCTIONS
# ═══════════════════════════════════════════════════════════════════

class ProgressObserver:
    """
    Receives periodic scan progress from the account aggregator.

    Subclasses override the hooks they care about; the base class ignores
    everything, so it doubles as a silent observer.
    """

    def on_page(self, entries: int):
        pass

    def on_progress(self, processed: int, rate: float):
        pass

    def on_complete(self, processed: int, elapsed: float):
        pass


class LoggingProgressObserver(ProgressObserver):
    """Logs progress lines and keeps the scan metrics current."""

    def on_page(self, entries: int):
        pages_fetched.inc()
        accounts_processed.inc(entries)

    def on_progress(self, processed: int, rate: float):
        scan_rate.set(rate)
        logger.info(f"Processed {processed} accounts ({rate:.1f} acct/s)")

    def on_complete(self, processed: int, elapsed: float):
        scan_duration_seconds.observe(elapsed)
        logger.info(f"Total accounts: {processed}")


def update_metrics(summary):
    """
    Publish a composed summary to the supply gauges.

    Args:
        summary: SummaryResult instance
    """
    supply_total.set(summary.total)
    supply_locked.set(summary.locked_up)
    supply_reserved.set(summary.reserved)
    supply_unbonding.set(summary.unbonding)
    supply_circulating.set(summary.circulating)
