import sys

from .validate_cli import main

sys.exit(main())
