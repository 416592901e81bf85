import sys

from gitshame.cli import main

sys.exit(main())
