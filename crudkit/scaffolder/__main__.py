import sys

from crudkit.scaffolder.cli import main

if __name__ == "__main__":
    sys.exit(main())
