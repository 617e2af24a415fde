import sys

from codestats_readme.cli import main

if __name__ == "__main__":
    sys.exit(main())
