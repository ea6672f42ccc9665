"""
Statement transports.

This module provides:
- StatementTransport: Abstract interface the processor dispatches to
- StatementStore: Transport that can read statements back
- FileStatementStore: File-based append-only storage (JSONL)
- S3StatementStore: S3-based storage (one object per statement)
- transport_from_env: Build a transport from environment variables

Environment Variables:
    STATEMENTS_TRANSPORT: file or s3 - default: file
    STATEMENTS_LOG_PATH: JSONL path for the file store - default: /tmp/statements/statements.jsonl
    STATEMENTS_S3_BUCKET: Bucket for the s3 store (required for s3)
    STATEMENTS_S3_PREFIX: Key prefix - default: statements
    STATEMENTS_S3_ENDPOINT: Endpoint URL (MinIO, localstack, ...)
    STATEMENTS_S3_REGION: AWS region - default: us-east-1
    STATEMENTS_S3_SKIP_BUCKET_CHECK: true to skip head_bucket on startup
"""

import os

from ..core.errors import StatementError
from .store import DispatchResult, StatementStore, StatementTransport
from .file_store import FileStatementStore
from .s3_store import S3StatementStore

DEFAULT_LOG_PATH = "/tmp/statements/statements.jsonl"

__all__ = [
    "DEFAULT_LOG_PATH",
    "DispatchResult",
    "StatementTransport",
    "StatementStore",
    "FileStatementStore",
    "S3StatementStore",
    "transport_from_env",
]


def transport_from_env() -> StatementStore:
    """
    Build the configured store.

    Raises:
        StatementError: If the transport name is unknown or the s3 bucket is unset
    """
    name = os.getenv("STATEMENTS_TRANSPORT", "file").strip().lower()

    if name == "file":
        return FileStatementStore(os.getenv("STATEMENTS_LOG_PATH", DEFAULT_LOG_PATH))

    if name == "s3":
        bucket = os.getenv("STATEMENTS_S3_BUCKET", "").strip()
        if not bucket:
            raise StatementError("STATEMENTS_S3_BUCKET is not set")
        return S3StatementStore(
            bucket=bucket,
            prefix=os.getenv("STATEMENTS_S3_PREFIX", "statements"),
            endpoint_url=os.getenv("STATEMENTS_S3_ENDPOINT") or None,
            region=os.getenv("STATEMENTS_S3_REGION", "us-east-1"),
            check_bucket=os.getenv("STATEMENTS_S3_SKIP_BUCKET_CHECK", "").lower() != "true",
        )

    raise StatementError(f"Unknown transport: {name}")
