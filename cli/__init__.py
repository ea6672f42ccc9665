"""
Statements CLI - dual-format learning statements

Commands:
- statements emit - Render and store a statement for one event
- statements kinds - List registered event kinds and their rules
- statements log tail/show - Inspect a JSONL statement log
"""

__version__ = "0.1.0"
