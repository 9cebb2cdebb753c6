"""Command-line interface."""
import sys

from heatfem.main import main

if __name__ == "__main__":
    sys.exit(main())
