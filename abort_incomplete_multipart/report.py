import json
from datetime import datetime


def _json_default(value):
    # boto3 returns Initiated as a datetime
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def collect_multipart_uploads(results):
    """Map bucket name to its uploads; a repeated bucket name keeps the last entry."""
    collected = {}
    for result in results:
        collected[result.bucket] = result.uploads
    return collected


def format_multipart_uploads(results):
    """Render the discovery set as indented JSON, keeping the provider's field order."""
    return json.dumps(collect_multipart_uploads(results), indent=4, default=_json_default)


def print_multipart_uploads(results):
    print(format_multipart_uploads(results) + "\n")
