import sys

from tick_habitat.cli import main

sys.exit(main())
