import sys

from gravsim.cli import main

sys.exit(main())
