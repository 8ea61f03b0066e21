"""
Provider Metrics - fetch bookkeeping for the three DefiLlama feeds

One SourceMetrics per feed (chains, stablecoins, bridges) counts outcomes
and keeps a rolling latency window. A bounded log of recent fetches backs
the /api/metrics/errors endpoint. State lives in memory only and views never
read it.
"""

import time
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Deque, Dict, List, Optional
import logging

logger = logging.getLogger("ProviderMetrics")

SLOW_FETCH_MS = 5000
MAX_RECENT_CALLS = 500
LATENCY_WINDOW = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FetchMetric:
    """One entry of the recent-fetch log"""
    source: str
    endpoint: str
    status: str  # success | error | timeout
    response_time_ms: float
    timestamp: str
    error_message: Optional[str] = None
    status_code: Optional[int] = None


@dataclass
class SourceMetrics:
    """Running counters for a single feed"""
    total_calls: int = 0
    success_count: int = 0
    error_count: int = 0
    timeout_count: int = 0
    fastest_ms: Optional[float] = None
    slowest_ms: float = 0.0
    last_error: Optional[str] = None
    last_error_time: Optional[str] = None
    last_success_time: Optional[str] = None
    latencies: Deque[float] = field(default_factory=lambda: deque(maxlen=LATENCY_WINDOW))

    def observe(self, status: str, elapsed_ms: float, at: str, error: Optional[str] = None):
        self.total_calls += 1
        if status == 'success':
            self.success_count += 1
            self.last_success_time = at
        else:
            if status == 'timeout':
                self.timeout_count += 1
            else:
                self.error_count += 1
            self.last_error = error or status
            self.last_error_time = at

        self.latencies.append(elapsed_ms)
        self.fastest_ms = elapsed_ms if self.fastest_ms is None else min(self.fastest_ms, elapsed_ms)
        self.slowest_ms = max(self.slowest_ms, elapsed_ms)

    @property
    def failures(self) -> int:
        return self.error_count + self.timeout_count

    def summary(self, source: str) -> Dict[str, Any]:
        mean_ms = sum(self.latencies) / len(self.latencies) if self.latencies else 0.0
        rate = round(100 * self.success_count / self.total_calls, 1) if self.total_calls else 0
        return {
            'source': source,
            'total_calls': self.total_calls,
            'success_count': self.success_count,
            'error_count': self.error_count,
            'timeout_count': self.timeout_count,
            'success_rate': rate,
            'failure_count': self.failures,
            'avg_response_ms': round(mean_ms, 1),
            'min_response_ms': round(self.fastest_ms or 0.0, 1),
            'max_response_ms': round(self.slowest_ms, 1),
            'last_error': self.last_error,
            'last_error_time': self.last_error_time,
            'last_success_time': self.last_success_time,
        }


class ProviderMetricsTracker:
    """
    Usage:
        with FetchTimer('chains', url, tracker) as timer:
            response = await client.get(url)
            timer.status_code = response.status_code

        stats = tracker.get_all_stats()
    """

    SOURCES = ('chains', 'stablecoins', 'bridges')

    def __init__(self):
        self.reset()

    def reset(self):
        self._sources: Dict[str, SourceMetrics] = {}
        self._log: Deque[Dict[str, Any]] = deque(maxlen=MAX_RECENT_CALLS)
        self._started = _utcnow()

    def record_call(
        self,
        source: str,
        endpoint: str,
        status: str,
        response_time_s: float,
        error_message: str = None,
        status_code: int = None
    ):
        key = source.lower()
        elapsed_ms = response_time_s * 1000
        at = _utcnow().isoformat()

        self._log.append(asdict(FetchMetric(
            source=key,
            endpoint=endpoint,
            status=status,
            response_time_ms=round(elapsed_ms, 2),
            timestamp=at,
            error_message=error_message,
            status_code=status_code,
        )))
        self._sources.setdefault(key, SourceMetrics()).observe(status, elapsed_ms, at, error_message)

        if elapsed_ms > SLOW_FETCH_MS:
            logger.warning(f"[ProviderMetrics] {key} fetch of {endpoint} needed {elapsed_ms:.0f}ms")

    def get_source_stats(self, source: str) -> Dict[str, Any]:
        metrics = self._sources.get(source.lower())
        if metrics is None:
            return {'source': source, 'status': 'no_data'}
        return metrics.summary(source)

    def get_all_stats(self) -> Dict[str, Any]:
        """Per-feed summaries, totals and process uptime"""
        uptime = (_utcnow() - self._started).total_seconds()
        names = sorted(set(self._sources) | set(self.SOURCES))
        sources = {name: self.get_source_stats(name) for name in names}

        fetches = sum(m.total_calls for m in self._sources.values())
        failures = sum(m.failures for m in self._sources.values())
        overall = round(100 * (fetches - failures) / fetches, 1) if fetches else 100

        return {
            'uptime_seconds': round(uptime, 0),
            'uptime_human': str(timedelta(seconds=int(uptime))),
            'started_at': self._started.isoformat(),
            'total_fetches': fetches,
            'total_failures': failures,
            'overall_success_rate': overall,
            'sources': sources,
        }

    def get_recent_errors(self, limit: int = 20) -> List[Dict[str, Any]]:
        """Failed fetches, newest first"""
        failed = (entry for entry in reversed(self._log) if entry['status'] != 'success')
        return [entry for _, entry in zip(range(limit), failed)]


provider_metrics = ProviderMetricsTracker()


class FetchTimer:
    """Times the wrapped block and records it against `source`; never swallows the exception"""

    def __init__(self, source: str, endpoint: str = '', tracker: ProviderMetricsTracker = None):
        self.source = source
        self.endpoint = endpoint
        self.tracker = tracker or provider_metrics
        self.status_code = None
        self._t0 = 0.0

    def __enter__(self):
        self._t0 = time.monotonic()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.monotonic() - self._t0
        status, message = 'success', None

        if exc_type is not None:
            message = (str(exc_val) or exc_type.__name__)[:200]
            timed_out = getattr(exc_val, 'timed_out', False) or 'timeout' in exc_type.__name__.lower()
            status = 'timeout' if timed_out else 'error'

        self.tracker.record_call(
            source=self.source,
            endpoint=self.endpoint,
            status=status,
            response_time_s=elapsed,
            error_message=message,
            status_code=self.status_code,
        )
        return False
