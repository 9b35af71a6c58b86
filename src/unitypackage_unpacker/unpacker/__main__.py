"""Allow ``python -m unitypackage_unpacker.unpacker``."""

import sys

from .cli import main

sys.exit(main())
