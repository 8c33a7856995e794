"""Telemetry helpers for recording export runs."""

from .run_log import ExportRunLogger, append_jsonl, read_jsonl

__all__ = ["ExportRunLogger", "append_jsonl", "read_jsonl"]
