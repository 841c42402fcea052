import argparse
import logging

from abort_incomplete_multipart.client import create_s3_client
from abort_incomplete_multipart.confirm import handle_abort_request
from abort_incomplete_multipart.discovery import find_multipart_uploads
from abort_incomplete_multipart.errors import AbortError, OptionsError
from abort_incomplete_multipart.logger import setup_logger
from abort_incomplete_multipart.report import print_multipart_uploads

logger = logging.getLogger(__name__)


class _OptionState:
    """Marks a value-taking option that has no usable value."""

    def __init__(self, label):
        self.label = label

    def __repr__(self):
        return self.label


ABSENT = _OptionState('ABSENT')  # flag not given at all
NO_ARGUMENT = _OptionState('NO_ARGUMENT')  # flag given without its argument

OPTION_DEFINITIONS = [
    {'name': 'help', 'type': bool, 'help': "Show this page"},
    {'name': 'bucket', 'type': str, 'metavar': 'name', 'help': "Only find uploads in this bucket (optional)"},
    {'name': 'prefix', 'type': str, 'metavar': 'key', 'help': "Only find uploads with this key prefix (optional)"},
    {'name': 'abort', 'type': bool, 'help': "Abort the uploads that are found (after prompt)"},
    {'name': 'force', 'type': bool, 'help': "Don't prompt to confirm abortion"},
    {'name': 'profile', 'type': str, 'metavar': 'name', 'help': "AWS profile to use (optional, default credential chain otherwise)"},
    {'name': 'region', 'type': str, 'metavar': 'name', 'help': "AWS region for the S3 client (optional)"},
    {'name': 'log-file', 'type': str, 'metavar': 'path', 'help': "Also write log messages to this file (optional)"},
]


class OptionsParser(argparse.ArgumentParser):
    """ArgumentParser that raises OptionsError instead of exiting with status 2."""

    def error(self, message):
        raise OptionsError(message)


def _dest(option):
    return option['name'].replace('-', '_')


def build_parser(definitions=OPTION_DEFINITIONS):
    parser = OptionsParser(
        prog="abort-incomplete-multipart",
        description="Find and abort incomplete S3 multipart uploads",
        add_help=False
    )
    for option in definitions:
        if option['type'] is bool:
            parser.add_argument(f"--{option['name']}", action="store_true", help=option['help'])
        else:
            parser.add_argument(
                f"--{option['name']}",
                nargs='?',
                const=NO_ARGUMENT,
                default=ABSENT,
                metavar=option.get('metavar'),
                help=option['help']
            )
    return parser


def validate_options(options, definitions=OPTION_DEFINITIONS):
    """Check required options, then turn absent or argumentless values into None."""
    for option in definitions:
        value = getattr(options, _dest(option))
        if option.get('required'):
            if value is ABSENT:
                raise OptionsError(f"Option --{option['name']} is required!")
            elif value is NO_ARGUMENT:
                raise OptionsError(f"Option --{option['name']} requires an argument!")

    for option in definitions:
        if getattr(options, _dest(option)) in (ABSENT, NO_ARGUMENT):
            setattr(options, _dest(option), None)
    return options


def run(options):
    """Discover, report and (optionally) abort; returns the number of aborts issued or None."""
    s3_client = create_s3_client(options.profile, options.region)

    results = find_multipart_uploads(s3_client, options.bucket, options.prefix)
    print_multipart_uploads(results)

    return handle_abort_request(s3_client, results, abort=options.abort, force=options.force)


def main(argv=None):
    """Command line entry point; returns the process exit code."""
    setup_logger()
    parser = build_parser(OPTION_DEFINITIONS)

    try:
        options = parser.parse_args(argv)

        if options.help:
            print(parser.format_help())
            return 0

        validate_options(options, OPTION_DEFINITIONS)
        if options.log_file:
            setup_logger(options.log_file)

        run(options)
    except OptionsError as e:
        logger.error(str(e))
        return 1
    except AbortError:
        # The failing request was already reported
        return 1
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        logger.error("Terminating due to fatal errors.")
        return 1

    return 0
