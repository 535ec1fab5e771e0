import sys

from spheretracer.cli import main

sys.exit(main())
