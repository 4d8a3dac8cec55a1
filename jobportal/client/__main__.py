import sys

from jobportal.client.cli import main

sys.exit(main())
