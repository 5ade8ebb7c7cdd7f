import sys

from personal_dashboard.app import main

sys.exit(main())
