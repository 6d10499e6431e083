"""Workflow notification queue: enqueue, preview and deliver notifications."""

__version__ = "0.1.0"
