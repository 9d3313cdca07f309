import argparse
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from . import config as cfg
from . import uploader

USAGE_EXAMPLES = """
Examples:
  $ s3upload my-bucket --file index.html
  $ s3upload react-site --dir build --access-key-id $AWS_ACCESS_KEY_ID \\
      --secret-access-key $AWS_SECRET_ACCESS_KEY --endpoint $S3_URL --region $AWS_REGION
"""


class UsageError(Exception):
    """Command line input that cannot be turned into an upload."""


@dataclass(frozen=True)
class UploadConfig:
    bucket: str
    region: Optional[str] = None
    endpoint: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    file: Optional[Path] = None
    dir: Optional[Path] = None
    path_style: bool = False


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="s3upload",
        description="Upload a single file or a whole directory tree to an S3-compatible bucket.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("bucket", nargs="?", type=str, help="Target S3 bucket name")
    p.add_argument("--file", "-f", default=None, help="Single file to upload")
    p.add_argument("--dir", default=None, help="Directory to upload recursively")
    p.add_argument(
        "--region",
        default=None,
        help="AWS region for the S3 client (defaults to environment/config)",
    )
    p.add_argument(
        "--endpoint",
        default=None,
        help="S3 endpoint URL (e.g., http://localhost:9000); falls back to env S3_ENDPOINT_URL",
    )
    p.add_argument("--access-key-id", default=None, help="AWS access key ID")
    p.add_argument("--secret-access-key", default=None, help="AWS secret access key")
    p.add_argument(
        "--path-style",
        action="store_true",
        help="Use path-style addressing (required by some S3-compatible services)",
    )
    p.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {cfg.VERSION}",
        help="Displays the version number",
    )
    return p


def resolve_endpoint(args: argparse.Namespace) -> Optional[str]:
    # Priority: --endpoint > env S3_ENDPOINT_URL > config.DEFAULT_ENDPOINT_URL
    return args.endpoint or os.getenv("S3_ENDPOINT_URL") or cfg.DEFAULT_ENDPOINT_URL


def resolve_config(args: argparse.Namespace) -> UploadConfig:
    if not args.bucket:
        raise UsageError("Please provide a bucket name as argument")
    if not args.file and not args.dir:
        raise UsageError("Either --file or --dir must be specified")

    return UploadConfig(
        bucket=args.bucket,
        region=args.region,
        endpoint=resolve_endpoint(args),
        access_key_id=args.access_key_id,
        secret_access_key=args.secret_access_key,
        file=Path(args.file) if args.file else None,
        # --file takes precedence, --dir is dropped silently
        dir=None if args.file else Path(args.dir),
        path_style=bool(args.path_style or cfg.DEFAULT_USE_PATH_STYLE),
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        upload_config = resolve_config(args)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        if not args.bucket:
            parser.print_help(sys.stderr)
        return 1

    if upload_config.dir is not None and not upload_config.dir.is_dir():
        print(f"Directory not found: {upload_config.dir}", file=sys.stderr)
        return 1

    # Upload failures are left to propagate and end the process non-zero
    uploader.run(upload_config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
