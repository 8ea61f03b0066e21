"""
Metrics API Router - Exposes DefiLlama fetch stats and health status

Endpoints:
- GET /api/metrics - All feed stats
- GET /api/metrics/source/{source} - One feed's stats
- GET /api/metrics/errors - Recent failed fetches
- GET /api/metrics/health - Overall upstream health
"""

from fastapi import APIRouter, HTTPException, Query
from infrastructure.api_metrics import provider_metrics

router = APIRouter(prefix="/api/metrics", tags=["metrics"])


@router.get("")
async def get_all_metrics():
    """
    Get metrics for every DefiLlama feed

    Returns:
    - Uptime info
    - Per-feed stats (success rate, response times, last error)
    - Total fetch counts
    """
    return provider_metrics.get_all_stats()


@router.get("/source/{source}")
async def get_source_metrics(source: str):
    """
    Get detailed metrics for one feed

    Sources: chains, stablecoins, bridges
    """
    stats = provider_metrics.get_source_stats(source)
    if stats.get('status') == 'no_data':
        raise HTTPException(status_code=404, detail=f"No data for source: {source}")
    return stats


@router.get("/errors")
async def get_recent_errors(limit: int = Query(20, ge=1, le=500)):
    """
    Get recent failed fetches
    """
    errors = provider_metrics.get_recent_errors(limit)
    return {
        'count': len(errors),
        'errors': errors
    }


@router.get("/health")
async def health_check():
    """
    Upstream health: degraded below 95% success, unhealthy below 80%
    """
    stats = provider_metrics.get_all_stats()

    health = "healthy"
    issues = []

    for name, data in stats['sources'].items():
        if data.get('total_calls', 0) < 5:  # Only judge feeds with some history
            continue

        success_rate = data.get('success_rate', 100)
        if success_rate < 80:
            health = "unhealthy"
            issues.append(f"{name}: {success_rate}% success rate")
        elif success_rate < 95:
            if health == "healthy":
                health = "degraded"
            issues.append(f"{name}: {success_rate}% success rate")

        avg_ms = data.get('avg_response_ms', 0)
        if avg_ms > 5000:
            if health == "healthy":
                health = "degraded"
            issues.append(f"{name}: {avg_ms:.0f}ms avg response")

    return {
        'status': health,
        'uptime': stats['uptime_human'],
        'total_fetches': stats['total_fetches'],
        'issues': issues
    }
