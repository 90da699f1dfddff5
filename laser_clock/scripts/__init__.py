"""Command-line entrypoints: ``run_clock`` and ``preview_frame``."""
