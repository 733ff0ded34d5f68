import sys

from pity_sim.cli import main

sys.exit(main())
