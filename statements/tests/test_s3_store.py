"""
Unit tests for S3StatementStore using moto (S3 mock).

Test coverage:
- Send + read roundtrip
- Duplicate detection via conditional put
- Direct get by id
- Pagination (1000+ statements)
- Bucket access errors
"""

import boto3
import pytest
from moto import mock_aws

from statements.builders import assignment
from statements.core import PlatformConfig, RenderedStatement, TransportError
from statements.transport import S3StatementStore
from statements.tests.fixtures import make_event

BUCKET = "test-bucket"


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


def _create_bucket() -> None:
    s3_client = boto3.client("s3", region_name="us-east-1")
    s3_client.create_bucket(Bucket=BUCKET)


def _statement(statement_id: str) -> RenderedStatement:
    return RenderedStatement(
        id=statement_id,
        kind="assignment.view",
        verb="http://id.tincanapi.com/verb/viewed",
        actor="u1",
        timestamp="2024-03-01T09:30:00.000Z",
        xapi={"id": statement_id},
        caliper={"id": f"urn:uuid:{statement_id}"},
    )


@mock_aws
def test_send_read_roundtrip():
    _create_bucket()
    store = S3StatementStore(bucket=BUCKET, prefix="statements")

    result = store.send(_statement("id-1"))
    store.send(_statement("id-2"))

    assert result.committed
    assert result.location == f"s3://{BUCKET}/statements/id-1.json"
    assert [s.id for s in store.read()] == ["id-1", "id-2"]


@mock_aws
def test_resend_is_duplicate():
    """Conditional put refuses to overwrite an existing statement."""
    _create_bucket()
    store = S3StatementStore(bucket=BUCKET)

    store.send(_statement("id-1"))
    again = store.send(_statement("id-1"))

    assert again.duplicate
    assert not again.committed
    assert len(list(store.read())) == 1


@mock_aws
def test_get_by_id():
    _create_bucket()
    store = S3StatementStore(bucket=BUCKET)
    store.send(_statement("id-1"))

    assert store.get("id-1") == _statement("id-1")
    assert store.get("missing") is None


@mock_aws
def test_read_ignores_foreign_keys():
    _create_bucket()
    store = S3StatementStore(bucket=BUCKET)
    store.send(_statement("id-1"))
    boto3.client("s3", region_name="us-east-1").put_object(
        Bucket=BUCKET, Key="statements/notes.txt", Body=b"hello"
    )

    assert [s.id for s in store.read()] == ["id-1"]


@mock_aws
def test_pagination_1000_plus_statements():
    """Paginator must not silently truncate at 1000 keys."""
    _create_bucket()
    store = S3StatementStore(bucket=BUCKET)

    for i in range(1005):
        store.send(_statement(f"id-{i:05d}"))

    ids = [s.id for s in store.read()]
    assert len(ids) == 1005
    assert ids == sorted(ids)


@mock_aws
def test_missing_bucket():
    with pytest.raises(TransportError, match="not accessible"):
        S3StatementStore(bucket="no-such-bucket")


@mock_aws
def test_send_to_missing_bucket_without_check():
    store = S3StatementStore(bucket="no-such-bucket", check_bucket=False)

    with pytest.raises(TransportError):
        store.send(_statement("id-1"))


@mock_aws
def test_end_to_end_grade():
    _create_bucket()
    store = S3StatementStore(bucket=BUCKET)
    config = PlatformConfig(platform="acme", transport=store)
    md = {"id": "https://x/s1", "assignment": "https://x/a1", "grade": 45, "grade_max": 50}

    result = assignment.grade(config, make_event(md)).unwrap()

    stored = store.get(result.statement_id)
    assert stored.xapi["result"]["score"]["scaled"] == 0.9
    assert stored.caliper["generated"]["normalScore"] == 0.9
