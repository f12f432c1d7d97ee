"""Shared helpers for TimePulse."""
