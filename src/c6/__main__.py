import sys

from c6.cli import main

sys.exit(main())
