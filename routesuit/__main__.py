import sys

from routesuit.cli import main

sys.exit(main())
