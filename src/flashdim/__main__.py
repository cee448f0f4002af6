import sys

from flashdim.main import run

sys.exit(run())
