"""Cross-cutting logging, metrics and model helpers."""
