"""Run ProGuard from typed, file-aware task definitions."""

__version__ = "0.1.0"
