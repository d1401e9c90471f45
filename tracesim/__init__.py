"""Trace-driven branch predictor, branch target buffer and cache simulators."""

__version__ = "0.1.0"