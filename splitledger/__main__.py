"""Allow `python -m splitledger`."""

import sys

from splitledger.console import main

sys.exit(main())
