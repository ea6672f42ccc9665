"""
Test suite for the statement engine.

Focus areas:
- Validation rules and short-circuiting
- Identifier determinism
- Absent-value pruning in both formats
- End-to-end assignment statements
- Transports (JSONL file, S3)
"""
