"""
Defaults for s3upload when a flag or environment variable is not given.
"""

# Reported by `s3upload --version`.
VERSION: str = "0.1.0"

# Endpoint used when neither `--endpoint` nor S3_ENDPOINT_URL is set.
# None lets boto3 pick the AWS endpoint for the region.
DEFAULT_ENDPOINT_URL: str | None = None

# Force path-style addressing for every run, as if `--path-style` were passed.
DEFAULT_USE_PATH_STYLE: bool = False
