"""Command-line interface."""
import sys

from segmentdistance.main import main

if __name__ == "__main__":
    sys.exit(main())
