"""Run with: python -m cityblocks"""
import sys

from cityblocks.main import main

sys.exit(main())
