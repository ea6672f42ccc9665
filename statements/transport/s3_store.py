"""
S3-based statement store using one-object-per-statement pattern.

Each statement is stored as a separate S3 object with key: {prefix}/{id}.json
Body format: {"id": "...", "kind": "...", "xapi": {...}, "caliper": {...}}

Statement ids are derived deterministically, so a conditional put
(If-None-Match: *) is enough to make re-sends idempotent.
"""

import json
from typing import Iterator, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.canonical import canonical_json_str
from ..core.errors import TransportError
from ..core.statement import RenderedStatement
from ..logging_config import get_logger
from .store import DispatchResult, StatementStore

_PRECONDITION_CODES = ("PreconditionFailed", "412")


class S3StatementStore(StatementStore):
    """
    S3-based statement store.

    Storage format: One JSON object per statement
    Object key: {prefix}/{id}.json

    Guarantees:
    - Write-once objects (conditional put, no overwrite)
    - Re-sent statements reported as duplicates

    Paginator: boto3 list_objects_v2 returns max 1000 keys per call.
    Use paginator to iterate all keys.
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "statements",
        endpoint_url: Optional[str] = None,
        region: str = "us-east-1",
        check_bucket: bool = True,
    ) -> None:
        """
        Initialize S3 statement store.

        Args:
            bucket: S3 bucket name
            prefix: Key prefix for statements (default: "statements")
            endpoint_url: S3 endpoint URL (for MinIO, localstack, etc.)
            region: AWS region (default: us-east-1)
            check_bucket: Verify the bucket is reachable on startup

        Raises:
            TransportError: If S3 client creation fails or the bucket is not accessible
        """
        self.bucket = bucket
        self.prefix = prefix.rstrip("/")
        self.endpoint_url = endpoint_url
        self.region = region

        # Credentials from environment: AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY
        try:
            self.s3_client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                region_name=region,
            )
        except (BotoCoreError, ValueError) as e:
            raise TransportError(f"Failed to create S3 client: {e}") from e

        if check_bucket:
            try:
                self.s3_client.head_bucket(Bucket=bucket)
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "Unknown")
                raise TransportError(
                    f"Bucket '{bucket}' not accessible (code: {error_code})"
                ) from e
            except BotoCoreError as e:
                raise TransportError(f"Bucket '{bucket}' not accessible: {e}") from e

    def _key_for_id(self, statement_id: str) -> str:
        return f"{self.prefix}/{statement_id}.json"

    def _id_from_key(self, key: str) -> Optional[str]:
        if not key.startswith(self.prefix + "/"):
            return None
        basename = key[len(self.prefix) + 1 :]
        if not basename.endswith(".json") or "/" in basename:
            return None
        return basename[:-5]

    def send(self, statement: RenderedStatement) -> DispatchResult:
        """
        Write statement object if it does not already exist.

        Raises:
            TransportError: If the put fails for any reason other than an
                existing object
        """
        logger = get_logger(__name__, trace_id=statement.id)
        key = self._key_for_id(statement.id)
        location = f"s3://{self.bucket}/{key}"
        body = canonical_json_str(statement.to_record())

        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body.encode("utf-8"),
                ContentType="application/json",
                IfNoneMatch="*",
            )
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _PRECONDITION_CODES:
                logger.debug("Statement already stored", extra={"key": key})
                return DispatchResult(
                    statement_id=statement.id,
                    location=location,
                    committed=False,
                    duplicate=True,
                )
            raise TransportError(f"Failed to put {location} (code: {code})") from e
        except BotoCoreError as e:
            raise TransportError(f"Failed to put {location}: {e}") from e

        logger.debug("Statement stored", extra={"key": key})
        return DispatchResult(statement_id=statement.id, location=location, committed=True)

    def _get_object(self, key: str) -> RenderedStatement:
        response = self.s3_client.get_object(Bucket=self.bucket, Key=key)
        body = response["Body"].read().decode("utf-8")
        return RenderedStatement.from_record(json.loads(body))

    def read(self) -> Iterator[RenderedStatement]:
        """
        Read all statements under the prefix in key order.

        Raises:
            TransportError: If listing or reading fails
        """
        try:
            paginator = self.s3_client.get_paginator("list_objects_v2")
            page_iterator = paginator.paginate(Bucket=self.bucket, Prefix=self.prefix + "/")
            for page in page_iterator:
                for obj in page.get("Contents", []):
                    if self._id_from_key(obj["Key"]) is None:
                        continue
                    yield self._get_object(obj["Key"])
        except (BotoCoreError, ClientError, ValueError) as e:
            raise TransportError(f"Failed to read statements from S3: {e}") from e

    def get(self, statement_id: str) -> Optional[RenderedStatement]:
        """
        Fetch one statement directly by key.

        Raises:
            TransportError: If the read fails for a reason other than a missing key
        """
        try:
            return self._get_object(self._key_for_id(statement_id))
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in ("NoSuchKey", "404"):
                return None
            raise TransportError(f"Failed to get statement {statement_id}: {e}") from e
        except (BotoCoreError, ValueError) as e:
            raise TransportError(f"Failed to get statement {statement_id}: {e}") from e
