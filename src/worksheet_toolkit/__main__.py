import sys

from worksheet_toolkit.cli import main

sys.exit(main())
