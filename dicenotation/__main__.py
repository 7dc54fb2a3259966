import sys

from dicenotation.cli import main

sys.exit(main())
