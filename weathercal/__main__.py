import sys

from weathercal.cli import main

sys.exit(main())
