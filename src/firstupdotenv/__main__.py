import sys

from firstupdotenv.cli import main

sys.exit(main())
