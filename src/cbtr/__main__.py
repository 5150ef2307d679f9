"""Allow ``python -m cbtr <operation>``."""
import sys

from cbtr.cli._dispatcher import PROGRAM_NAME, main

sys.exit(main(prog=PROGRAM_NAME))
