import sys

from sbf_search.cli import main

sys.exit(main())
