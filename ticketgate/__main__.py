import sys

from ticketgate.main import main

sys.exit(main())
