import sys

from dailyword.cli import main

sys.exit(main())
