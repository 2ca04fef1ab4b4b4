from prometheus_client import Counter, Gauge, Histogram


class ReservationMetrics:
    """
    Livestream Reservation Core Metrics Collector

    Tracks slot admission outcomes, end-to-end reservation latency and the
    size of every in-process entity cache family
    """

    def __init__(self):
        # ========== Reservation Business Metrics ==========
        self.reservation_requests = Counter(
            'livestream_reservation_requests_total',
            'Total livestream reservation requests',
            ['result'],  # result: accepted/out_of_range/overbooked/invalid/storage_failure/error
        )

        self.reservation_duration = Histogram(
            'livestream_reservation_duration_seconds',
            'Reservation processing time (validation to commit)',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.reserved_slots = Counter(
            'livestream_reserved_slots_total',
            'Slot capacity units consumed by accepted reservations',
        )

        # ========== Entity Cache Metrics ==========
        self.cache_size = Gauge(
            'entity_cache_size',
            'Number of entries per cache family',
            ['family'],
        )

        self.cache_lookups = Counter(
            'entity_cache_lookups_total',
            'Cache lookups by family and outcome',
            ['family', 'outcome'],  # outcome: hit/miss
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, result: str, duration: float, slot_count: int = 0) -> None:
        self.reservation_requests.labels(result=result).inc()
        self.reservation_duration.labels(result=result).observe(duration)
        if slot_count:
            self.reserved_slots.inc(slot_count)

    def record_cache_lookup(self, *, family: str, hit: bool) -> None:
        self.cache_lookups.labels(family=family, outcome='hit' if hit else 'miss').inc()

    def set_cache_size(self, *, family: str, size: int) -> None:
        self.cache_size.labels(family=family).set(size)


# Global metrics instance
metrics = ReservationMetrics()
