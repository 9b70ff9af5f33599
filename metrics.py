# metrics.py

import threading
import time
from typing import Dict, Any

class Metrics:
    def __init__(self, name: str = "simulation"):
        self.name = name
        self._lock = threading.Lock()

        # Lookup routing metrics
        self.total_lookups = 0
        self.total_resolved = 0
        self.total_unresolved = 0
        self.sum_hops = 0
        self.max_hops = 0

        # Ring membership metrics
        self.total_adds = 0
        self.total_removes = 0
        self.total_resets = 0
        self.total_rebuilds = 0

        # last reset time
        self.start_time = time.time()

    # ---- Routing ----
    def record_lookup(self, hops: int, resolved: bool):
        with self._lock:
            self.total_lookups += 1
            self.sum_hops += hops
            self.max_hops = max(self.max_hops, hops)
            if resolved:
                self.total_resolved += 1
            else:
                self.total_unresolved += 1

    # ---- Membership ----
    def record_add(self):
        with self._lock:
            self.total_adds += 1

    def record_remove(self):
        with self._lock:
            self.total_removes += 1

    def record_reset(self):
        with self._lock:
            self.total_resets += 1

    def record_rebuild(self):
        with self._lock:
            self.total_rebuilds += 1

    # ---- Export ----
    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            uptime = time.time() - self.start_time
            avg_hops = (self.sum_hops / self.total_lookups) if self.total_lookups else 0.0

            return {
                "name": self.name,
                "uptime_sec": uptime,
                "lookup": {
                    "total_lookups": self.total_lookups,
                    "resolved": self.total_resolved,
                    "unresolved": self.total_unresolved,
                    "avg_hops": avg_hops,
                    "max_hops": self.max_hops,
                },
                "ring": {
                    "total_adds": self.total_adds,
                    "total_removes": self.total_removes,
                    "total_resets": self.total_resets,
                    "total_rebuilds": self.total_rebuilds,
                },
            }
