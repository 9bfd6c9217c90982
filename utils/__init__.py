"""Utility helpers for the Get Featured form engine."""

from __future__ import annotations

from .performance import PerformanceMetrics, PerformanceMonitor

__all__ = ["PerformanceMetrics", "PerformanceMonitor"]
