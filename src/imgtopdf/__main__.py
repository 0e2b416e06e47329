import sys

from imgtopdf.cli import main

sys.exit(main())
