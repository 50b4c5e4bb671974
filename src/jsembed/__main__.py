import sys

from jsembed.cli import main

sys.exit(main())
