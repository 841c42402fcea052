import boto3


def create_s3_client(profile_name=None, region_name=None):
    """Create the S3 client from the default credential chain, optionally narrowed to a profile/region."""
    session = boto3.session.Session(profile_name=profile_name, region_name=region_name)
    return session.client('s3')
