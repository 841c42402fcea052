class OptionsError(Exception):
    """Raised when the command line is missing a required option or its argument."""


class DiscoveryError(Exception):
    """Raised when buckets or multipart uploads could not be listed."""


class AbortError(Exception):
    """Raised when an abort request fails; earlier aborts are not rolled back."""

    def __init__(self, message, attempted=0):
        super().__init__(message)
        self.attempted = attempted  # abort requests issued, including the failed one
