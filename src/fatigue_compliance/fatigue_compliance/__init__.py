"""Fatigue Compliance package.

This package is organized by feature modules (patterns, assignments, compliance,
fatigue, ...) with a thin Flask controller layer over a pure evaluation engine.
"""
