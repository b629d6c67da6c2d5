# schoolhub/utils/cache_metrics.py
"""Hit/miss counters for the cached list endpoints, overall and per list."""
from collections import defaultdict
from typing import Dict, Any


def _hit_rate(hits: int, total: int) -> float:
    return round(hits / total * 100, 2) if total else 0


class CacheMetrics:
    def __init__(self):
        self.hits = defaultdict(int)
        self.misses = defaultdict(int)
        self.total_time_saved = 0.0

    def record_hit(self, prefix: str, time_saved: float = 0.0):
        self.hits[prefix] += 1
        self.total_time_saved += time_saved

    def record_miss(self, prefix: str):
        self.misses[prefix] += 1

    def get_stats(self) -> Dict[str, Any]:
        hits = sum(self.hits.values())
        total = hits + sum(self.misses.values())
        lists = sorted(set(self.hits) | set(self.misses))
        return {
            "hits": hits,
            "misses": total - hits,
            "total_requests": total,
            "hit_rate_percent": _hit_rate(hits, total),
            "total_time_saved_seconds": round(self.total_time_saved, 3),
            # e.g. {"lessons": {"hits": 3, "misses": 1, "hit_rate_percent": 75.0}}
            "lists": {
                prefix: {
                    "hits": self.hits[prefix],
                    "misses": self.misses[prefix],
                    "hit_rate_percent": _hit_rate(
                        self.hits[prefix], self.hits[prefix] + self.misses[prefix]
                    ),
                }
                for prefix in lists
            },
        }


metrics = CacheMetrics()
