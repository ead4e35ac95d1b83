"""
Consulta Analytics for the admin dashboard

Tracks:
1. Frequent queries (grouped by lower-cased, trimmed text)
2. Category distribution
3. Live system metrics over a short window (latency, throughput, sessions)
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from faq_assistant.config import Config

UNCATEGORIZED = "sin_categoria"


def _as_utc(value: Any) -> Optional[datetime]:
    """Mongo hands back naive UTC datetimes; older rows may hold ISO strings."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _iso(value: Any) -> Optional[str]:
    dt = _as_utc(value)
    return dt.isoformat() if dt else None


def _response_times(consultas: Iterable[Dict[str, Any]]) -> List[float]:
    return [
        float(c["response_time"])
        for c in consultas
        if isinstance(c.get("response_time"), (int, float))
    ]


# =============================================================================
# AGGREGATION
# =============================================================================

def summarize_consultas(consultas: List[Dict[str, Any]], top_n: int = 10) -> Dict[str, Any]:
    """Frequent queries, per-category share and total count."""
    total = len(consultas)
    query_map: Dict[str, Dict[str, Any]] = {}
    query_times: Dict[str, List[float]] = {}
    category_count: Dict[str, int] = {}

    for consulta in consultas:
        raw_query = str(consulta.get("query") or "")
        key = raw_query.lower().strip()
        category = consulta.get("category") or UNCATEGORIZED
        created = _as_utc(consulta.get("created_at"))

        stats = query_map.get(key)
        if stats is None:
            stats = query_map[key] = {
                "query": raw_query,
                "count": 0,
                "category": category,
                "averageResponseTime": 0.0,
                "lastUsed": None,
            }
            query_times[key] = []
        stats["count"] += 1
        query_times[key].extend(_response_times([consulta]))
        if created and (stats["lastUsed"] is None or created > stats["lastUsed"]):
            stats["lastUsed"] = created

        category_count[category] = category_count.get(category, 0) + 1

    for key, stats in query_map.items():
        times = query_times[key]
        stats["averageResponseTime"] = sum(times) / len(times) if times else 0.0
        stats["lastUsed"] = _iso(stats["lastUsed"])

    category_stats = sorted(
        (
            {
                "category": category,
                "totalQueries": count,
                "percentageOfTotal": (count / total) * 100,
            }
            for category, count in category_count.items()
        ),
        key=lambda item: item["totalQueries"],
        reverse=True,
    )

    frequent = sorted(query_map.values(), key=lambda item: item["count"], reverse=True)

    return {
        "frequentQueries": frequent[:top_n],
        "categoryStats": category_stats,
        "totalQueries": total,
    }


def compute_system_metrics(
    recent: List[Dict[str, Any]],
    window_minutes: int,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Metrics over consultas logged in the last `window_minutes`."""
    now = now or datetime.now(timezone.utc)
    count = len(recent)
    times = _response_times(recent)
    response_time = sum(times) / len(times) if times else 0
    requests_per_minute = count / window_minutes
    sessions = {c.get("session_id") for c in recent if c.get("session_id")}
    errors = sum(1 for c in recent if c.get("status") == "error")
    error_rate = errors / count if count else 0

    return {
        "metrics": {
            "responseTime": response_time,
            "requestsPerMinute": requests_per_minute,
            "activeUsers": len(sessions),
            "errorRate": error_rate,
            "lastUpdated": now.isoformat(),
        },
        "performance": {
            "hourly": {
                "labels": [now.strftime("%H:%M:%S")],
                "responseTime": [response_time],
                "requests": [requests_per_minute],
            }
        },
    }


# =============================================================================
# DATA ACCESS WRAPPERS
# =============================================================================

async def get_consulta_stats(db, top_n: int = None) -> Dict[str, Any]:
    consultas = await db.fetch_consultations()
    return summarize_consultas(consultas, top_n or Config.FREQUENT_QUERIES_LIMIT)


async def get_system_metrics(db, window_minutes: int = None) -> Dict[str, Any]:
    window = window_minutes or Config.METRICS_WINDOW_MINUTES
    now = datetime.now(timezone.utc)
    recent = await db.fetch_consultations(since=now - timedelta(minutes=window))
    return compute_system_metrics(recent, window, now)
