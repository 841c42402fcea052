"""Find and abort incomplete S3 multipart uploads."""

__version__ = "1.0.0"
