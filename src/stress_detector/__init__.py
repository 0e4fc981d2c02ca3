"""Stress Level Detector: structured stress analysis of free text via Gemini."""

__version__ = "0.1.0"
