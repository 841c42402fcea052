import sys

from abort_incomplete_multipart.cli import main

if __name__ == "__main__":
    sys.exit(main())
