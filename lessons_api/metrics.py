"""Process-wide metric instances registered on the default Prometheus registry."""

from shared.metrics import setup_metrics

http_metrics, lesson_metrics = setup_metrics()
