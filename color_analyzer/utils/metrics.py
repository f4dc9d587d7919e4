"""
Color Analyzer Metrics Collection
In-process metrics collection for monitoring and performance tracking.
"""
import time
from collections import defaultdict, deque, Counter
from typing import Any, Deque, Dict, Optional
from threading import Lock


class MetricsCollector:
    """Simple in-process metrics collector."""
    
    def __init__(self, max_timings: int = 1000):
        """Initialize metrics collector; only the last `max_timings` samples per operation are kept."""
        self._lock = Lock()
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=max_timings))
        self._start_time = time.time()
    
    def increment_request_count(self, operation: str):
        """Increment request counter for an operation ("analyze" or "filter")."""
        with self._lock:
            self._counters[f"{operation}_requests_total"] += 1
    
    def increment_processor_count(self, processor: str):
        """Increment processor usage counter."""
        with self._lock:
            self._counters[f"processor_used_total_{processor}"] += 1
    
    def increment_filter_count(self, filter_name: str):
        """Increment per-filter usage counter."""
        with self._lock:
            self._counters[f"filter_applied_total_{filter_name}"] += 1
    
    def increment_failure_count(self, operation: str, error_type: str):
        """Increment failure counter by operation and error type."""
        with self._lock:
            self._counters[f"{operation}_failed_total_{error_type}"] += 1
    
    def record_timing(self, operation: str, duration_ms: float):
        """Record timing for an operation."""
        with self._lock:
            self._timings[f"{operation}_duration_ms"].append(duration_ms)
    
    def get_counters(self) -> Dict[str, int]:
        """Get current counter values."""
        with self._lock:
            return dict(self._counters)
    
    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """Get timing statistics."""
        with self._lock:
            stats = {}
            for operation, timings in self._timings.items():
                if timings:
                    stats[operation] = {
                        "count": len(timings),
                        "mean": sum(timings) / len(timings),
                        "min": min(timings),
                        "max": max(timings),
                        "p50": self._percentile(timings, 50),
                        "p95": self._percentile(timings, 95)
                    }
            return stats
    
    def get_uptime_seconds(self) -> float:
        """Get service uptime in seconds."""
        return time.time() - self._start_time
    
    def get_summary(self) -> Dict[str, Any]:
        """Get complete metrics summary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats()
        }
    
    def reset(self):
        """Reset all metrics (for testing)."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._start_time = time.time()
    
    @staticmethod
    def _percentile(data: Deque[float], percentile: int) -> float:
        """Calculate percentile of data."""
        if not data:
            return 0.0
        
        sorted_data = sorted(data)
        k = (len(sorted_data) - 1) * percentile / 100
        f = int(k)
        c = k - f
        
        if f + 1 < len(sorted_data):
            return sorted_data[f] + c * (sorted_data[f + 1] - sorted_data[f])
        else:
            return sorted_data[f]


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _metrics
    if _metrics is not None:
        _metrics.reset()
