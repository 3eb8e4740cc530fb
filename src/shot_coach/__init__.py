"""Coaching feedback for sports-practice sessions via an OpenAI-compatible chat API."""

__version__ = "0.1.0"
