import logging
from collections import namedtuple

from botocore.exceptions import BotoCoreError, ClientError

from abort_incomplete_multipart.errors import DiscoveryError

logger = logging.getLogger(__name__)

# Uploads found in one bucket; a list of these is the discovery set
BucketUploads = namedtuple('BucketUploads', ['bucket', 'uploads'])


def find_multipart_uploads_in_bucket(s3_client, bucket_name, prefix=None):
    """List the incomplete multipart uploads of one bucket, optionally under a key prefix."""
    params = {'Bucket': bucket_name}
    if prefix:
        params['Prefix'] = prefix

    try:
        response = s3_client.list_multipart_uploads(**params)
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Failed to list multipart uploads in bucket \"{bucket_name}\", do you have permissions for that bucket?")
        raise DiscoveryError(f"Listing multipart uploads in bucket {bucket_name} failed: {e}") from e

    # Only the first page is read
    if response.get('IsTruncated'):
        logger.warning(f"Multipart upload listing for bucket {bucket_name} is truncated; only the first page is shown.")

    return BucketUploads(bucket_name, response.get('Uploads', []))


def list_bucket_names(s3_client):
    """List the names of all buckets visible to the caller, in listing order."""
    try:
        response = s3_client.list_buckets()
    except (ClientError, BotoCoreError) as e:
        logger.error("Failed to list buckets, do you have permission to do that for all regions? Perhaps supply --bucket <bucketname> instead.")
        raise DiscoveryError(f"Listing buckets failed: {e}") from e
    return [bucket['Name'] for bucket in response['Buckets']]


def find_multipart_uploads(s3_client, bucket_name=None, prefix=None):
    """Build the discovery set for one bucket, or for every bucket one at a time."""
    if bucket_name:
        return [find_multipart_uploads_in_bucket(s3_client, bucket_name, prefix)]

    results = []
    for name in list_bucket_names(s3_client):
        results.append(find_multipart_uploads_in_bucket(s3_client, name, prefix))
    return results
