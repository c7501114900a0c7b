from prometheus_client import Counter, Gauge, Histogram


class ReservationMetrics:
    """
    Seat reservation metrics collector

    Exposed on /metrics in the Prometheus text format.
    """

    def __init__(self) -> None:
        # ========== Reservation Business Metrics ==========
        self.reservation_requests = Counter(
            'seat_reservation_requests_total',
            'Reservation mutations by operation and outcome',
            ['operation', 'result'],  # operation: create/update/delete
        )

        self.reservation_duration = Histogram(
            'seat_reservation_duration_seconds',
            'Reservation mutation processing time',
            ['operation'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0],
        )

        self.trip_instances_created = Counter(
            'trip_instances_created_total',
            'Trip instances lazily created from default trips',
        )

        # ========== Change Notifier Metrics ==========
        self.broadcast_events = Counter(
            'seat_update_broadcast_total',
            'Seat update deliveries by result',
            ['result'],  # delivered/dropped
        )

        self.connected_observers = Gauge(
            'seat_update_observers',
            'Currently connected seat update observers',
            ['transport'],  # websocket/sse
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, operation: str, result: str, duration: float) -> None:
        self.reservation_requests.labels(operation=operation, result=result).inc()
        self.reservation_duration.labels(operation=operation).observe(duration)

    def record_trip_created(self) -> None:
        self.trip_instances_created.inc()

    def record_broadcast(self, *, delivered: int, dropped: int) -> None:
        if delivered:
            self.broadcast_events.labels(result='delivered').inc(delivered)
        if dropped:
            self.broadcast_events.labels(result='dropped').inc(dropped)


# Global metrics instance
metrics = ReservationMetrics()
