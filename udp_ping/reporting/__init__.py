"""Reporting module - JSON output for Prober runs."""

from .json_reporter import JsonReporter

__all__ = ["JsonReporter"]
