import sys

from gpml_codec.cli import main

sys.exit(main())
