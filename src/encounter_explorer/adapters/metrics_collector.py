"""
In-Memory Metrics Collector.

Stores stage timings and row counts in memory for the duration of a run.
"""

from __future__ import annotations

from datetime import datetime
from threading import Lock
from typing import Any, Dict, List, Optional


class InMemoryMetricsCollector:
    """Collects timing and count samples keyed by metric name."""

    def __init__(self) -> None:
        self._samples: Dict[str, List[Dict[str, Any]]] = {}
        self._lock = Lock()

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        with self._lock:
            self._append(name, "timing", float(duration_seconds), tags)

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        with self._lock:
            self._append(name, "count", int(value), tags)

    def samples(self, name: str) -> List[Dict[str, Any]]:
        """Raw samples recorded under ``name`` (copy)."""
        with self._lock:
            return [dict(s) for s in self._samples.get(name, [])]

    def get_metrics(self) -> Dict[str, Any]:
        """
        Summarize collected metrics.

        Returns:
            Dict of metric name -> {"count", "total", "last", "by_tag"}
            where ``by_tag`` maps a tag rendering such as ``stage=preview``
            to the sum of samples carrying that tag.
        """
        with self._lock:
            summary: Dict[str, Any] = {}
            for name, entries in self._samples.items():
                values = [e["value"] for e in entries]
                by_tag: Dict[str, float] = {}
                for entry in entries:
                    for key, tag in entry["tags"].items():
                        label = f"{key}={tag}"
                        by_tag[label] = by_tag.get(label, 0) + entry["value"]
                summary[name] = {
                    "count": len(values),
                    "total": sum(values),
                    "last": values[-1],
                    "by_tag": by_tag,
                }
            return summary

    def clear(self) -> None:
        with self._lock:
            self._samples.clear()

    def _append(
        self,
        name: str,
        kind: str,
        value: float,
        tags: Optional[Dict[str, str]],
    ) -> None:
        self._samples.setdefault(name, []).append(
            {
                "type": kind,
                "value": value,
                "tags": dict(tags or {}),
                "timestamp": datetime.now().isoformat(),
            }
        )
