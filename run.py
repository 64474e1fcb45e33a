"""
Entry Point Script (Bootstrap)
==============================
Development runner that works without installing the package.

It is located outside the 'src' package and modifies 'sys.path' so Python can
resolve imports like 'from cityblocks.model...'.

Usage:
    $ python run.py                 # bundled assets/data.csv
    $ python run.py other.csv       # any 7-column emissions table
    $ python run.py https://.../data.csv
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from cityblocks.main import main

if __name__ == "__main__":
    sys.exit(main())
