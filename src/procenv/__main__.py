import sys

from procenv.cli import main

sys.exit(main())
