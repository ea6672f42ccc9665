"""
Learning Statements

Deterministic rendering of learning-platform events into dual-format
analytics statements (xAPI-style flat statements and Caliper-style events).
"""

__version__ = "0.1.0"
