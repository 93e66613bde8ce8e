import sys

from hello.fetch.cli import main

sys.exit(main())
