from typing import List, Optional, Tuple

import pytest
from botocore.exceptions import ClientError


class FakeS3:
    """Stands in for a boto3 S3 client; records every upload_fileobj call."""

    def __init__(self, fail_on: Optional[int] = None) -> None:
        self.fail_on = fail_on
        self.calls: List[Tuple[str, str, bytes, Optional[dict]]] = []

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None, Callback=None, Config=None):
        if self.fail_on is not None and len(self.calls) + 1 == self.fail_on:
            raise ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
                "PutObject",
            )
        self.calls.append((bucket, key, fileobj.read(), ExtraArgs))

    @property
    def keys(self) -> List[str]:
        return [key for _, key, _, _ in self.calls]


@pytest.fixture
def fake_s3():
    return FakeS3()


@pytest.fixture
def site_dir(tmp_path, monkeypatch):
    """A small static site under tmp_path/build, with tmp_path as cwd."""
    monkeypatch.chdir(tmp_path)
    build = tmp_path / "build"
    (build / "assets" / "js").mkdir(parents=True)
    (build / "empty").mkdir()
    (build / "index.html").write_text("<html></html>")
    (build / "assets" / "style.css").write_text("body {}")
    (build / "assets" / "js" / "app.js").write_text("console.log(1)")
    return build
