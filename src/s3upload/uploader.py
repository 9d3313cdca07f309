import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

import boto3
from botocore.config import Config as BotoConfig

if TYPE_CHECKING:
    from .cli import UploadConfig


@dataclass
class UploadItem:
    local_path: Path
    key: str


def make_s3_client(
    region: Optional[str],
    endpoint_url: Optional[str],
    use_path_style: bool,
    credentials: Optional[dict],
):
    session = boto3.session.Session()
    boto_cfg = BotoConfig(s3={"addressing_style": "path" if use_path_style else "virtual"})
    client_kwargs = {"region_name": region, "config": boto_cfg, "endpoint_url": endpoint_url}
    if credentials:
        client_kwargs.update(credentials)
    # Anything left unset falls through to boto3's own environment/config lookup
    return session.client("s3", **{k: v for k, v in client_kwargs.items() if v is not None})


def guess_content_type(path: Path) -> Optional[str]:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type


def single_file_item(path: Path) -> UploadItem:
    return UploadItem(local_path=path, key=path.name)


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def collect_directory(root: Path) -> List[UploadItem]:
    """Return an UploadItem for every regular file below ``root``.

    Keys keep the directory argument as their leading segment, so uploading
    ``build`` produces ``build/index.html`` rather than ``index.html``.
    Directories, symlinks and other special entries are skipped. Order is
    whatever the walk yields. Missing, unreadable or non-directory paths
    raise instead of producing an empty listing.
    """
    if not root.exists():
        raise FileNotFoundError(f"Directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    items: List[UploadItem] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        parent = Path(dirpath)
        for name in filenames:
            path = parent / name
            if path.is_symlink() or not path.is_file():
                continue
            items.append(UploadItem(local_path=path, key=path.as_posix()))
    return items


def upload_item(s3, bucket: str, item: UploadItem) -> None:
    extra_args = {}
    content_type = guess_content_type(item.local_path)
    if content_type:
        extra_args["ContentType"] = content_type
    with item.local_path.open("rb") as fp:
        s3.upload_fileobj(fp, bucket, item.key, ExtraArgs=extra_args or None)


def upload_file(s3, bucket: str, path: Path) -> UploadItem:
    item = single_file_item(path)
    upload_item(s3, bucket, item)
    print(f"✓ Uploaded {item.key} to {bucket}", flush=True)
    return item


def upload_directory(s3, bucket: str, root: Path) -> List[UploadItem]:
    items = collect_directory(root)
    for item in items:
        # A failure here propagates; files already written stay written
        upload_item(s3, bucket, item)
        print(f"✓ Uploaded {item.key} to {bucket}", flush=True)

    print(f"Uploaded {len(items)} files to {bucket}", flush=True)
    return items


def run(config: "UploadConfig", s3=None) -> List[UploadItem]:
    """Upload whatever ``config`` names, one object at a time.

    ``config.file`` wins over ``config.dir`` when both are set.
    """
    if s3 is None:
        credentials = None
        if config.access_key_id or config.secret_access_key:
            credentials = {
                "aws_access_key_id": config.access_key_id,
                "aws_secret_access_key": config.secret_access_key,
            }
        s3 = make_s3_client(
            region=config.region,
            endpoint_url=config.endpoint,
            use_path_style=config.path_style,
            credentials=credentials,
        )

    if config.file is not None:
        return [upload_file(s3, config.bucket, config.file)]
    return upload_directory(s3, config.bucket, config.dir)
