import sys

from gambit.app import main

sys.exit(main())
