"""Urgency-aware multi-stop route optimization service."""
