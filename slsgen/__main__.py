"""Allow ``python -m slsgen``."""

from __future__ import annotations

import sys

from slsgen.main import main

sys.exit(main())
