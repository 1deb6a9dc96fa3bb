# MIT License
# Copyright (c) 2025 Hashborn

"""
Observability Module

Provides metrics and scan progress reporting for supplyaudit.
"""

from .metrics import metrics_registry, update_metrics, ProgressObserver, LoggingProgressObserver

__all__ = ['metrics_registry', 'update_metrics', 'ProgressObserver', 'LoggingProgressObserver']
