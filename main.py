#main.py
import sys

from discrakt.cli import main


if __name__ == "__main__":
    sys.exit(main())
