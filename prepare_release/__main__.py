import sys

from .prepare_release import main

sys.exit(main())
