#!/usr/bin/env python3
import sys
from emucli.cli import main

if __name__ == "__main__":
    sys.exit(main())
