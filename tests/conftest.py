import logging
from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError

from abort_incomplete_multipart.logger import LOGGER_NAME


def make_upload(key, upload_id):
    """An upload entry shaped like the ones boto3 returns from list_multipart_uploads."""
    return {
        'UploadId': upload_id,
        'Key': key,
        'Initiated': datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc),
        'StorageClass': 'STANDARD',
        'Owner': {'DisplayName': 'owner', 'ID': 'owner-id'},
        'Initiator': {'ID': 'arn:aws:iam::123456789012:user/uploader', 'DisplayName': 'uploader'},
    }


def client_error(operation_name, code='AccessDenied', message='Access Denied'):
    return ClientError({'Error': {'Code': code, 'Message': message}}, operation_name)


class FakeS3Client:
    """Records every S3 call in order and answers from canned data."""

    def __init__(self, buckets=None, uploads=None, fail_list_buckets=False,
                 fail_list_uploads_for=(), fail_abort_on=(), truncated=()):
        self.buckets = buckets or []
        self.uploads = uploads or {}
        self.fail_list_buckets = fail_list_buckets
        self.fail_list_uploads_for = set(fail_list_uploads_for)
        self.fail_abort_on = set(fail_abort_on)
        self.truncated = set(truncated)
        self.calls = []

    def list_buckets(self):
        self.calls.append(('list_buckets', {}))
        if self.fail_list_buckets:
            raise client_error('ListBuckets')
        return {'Buckets': [{'Name': name} for name in self.buckets]}

    def list_multipart_uploads(self, **params):
        self.calls.append(('list_multipart_uploads', params))
        bucket = params['Bucket']
        if bucket in self.fail_list_uploads_for:
            raise client_error('ListMultipartUploads')
        response = {'Bucket': bucket, 'IsTruncated': bucket in self.truncated}
        uploads = [
            upload for upload in self.uploads.get(bucket, [])
            if upload['Key'].startswith(params.get('Prefix', ''))
        ]
        # S3 leaves Uploads out of the response when there are none
        if uploads:
            response['Uploads'] = uploads
        return response

    def abort_multipart_upload(self, **params):
        self.calls.append(('abort_multipart_upload', params))
        if params['UploadId'] in self.fail_abort_on:
            raise client_error('AbortMultipartUpload', code='NoSuchUpload', message='The specified upload does not exist.')
        return {}

    def operations(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def fake_client():
    return FakeS3Client


@pytest.fixture
def use_client(monkeypatch):
    """Make the command line use the given fake client instead of boto3."""
    def install(client):
        created = []

        def create_s3_client(profile_name=None, region_name=None):
            created.append((profile_name, region_name))
            return client

        monkeypatch.setattr('abort_incomplete_multipart.cli.create_s3_client', create_s3_client)
        return created
    return install


@pytest.fixture
def answer(monkeypatch):
    """Feed a line to the confirmation prompt; None simulates a closed stdin."""
    def install(line):
        prompts = []

        def fake_input(prompt=''):
            prompts.append(prompt)
            if line is None:
                raise EOFError
            return line

        monkeypatch.setattr('builtins.input', fake_input)
        return prompts
    return install


@pytest.fixture(autouse=True)
def reset_logger():
    """Detach handlers main() attached, so later tests don't write to a closed capture stream."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
