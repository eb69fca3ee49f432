import sys

from snowdrift.cli import main

sys.exit(main())
