import logging

from botocore.exceptions import BotoCoreError, ClientError

from abort_incomplete_multipart.errors import AbortError

logger = logging.getLogger(__name__)


def abort_multipart_uploads(s3_client, results):
    """Abort every discovered upload in order, stopping at the first failure.

    The returned count (and ``AbortError.attempted`` on failure) is the number
    of abort requests issued, not the number confirmed by S3.
    """
    abort_count = 0

    for result in results:
        for upload in result.uploads:
            abort_count += 1
            try:
                s3_client.abort_multipart_upload(
                    Bucket=result.bucket,
                    Key=upload['Key'],
                    UploadId=upload['UploadId']
                )
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Error! {e}")
                logger.error(f"Stopped after {abort_count} abort requests; earlier aborts are not undone.")
                raise AbortError(str(e), attempted=abort_count) from e
            logger.info(f"Aborted multipart upload: {upload['Key']} with UploadId: {upload['UploadId']}")

    print(f"Aborted {abort_count} multipart uploads.")
    return abort_count
