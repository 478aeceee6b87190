"""
Entry Point Script (Bootstrap)
==============================
Runs the batch sweep from a source checkout without installing the package.

It adds the 'src' directory to the Python path so that
'from solislab...' resolves, then hands over to the CLI.

Usage:
    $ python run.py --seeds 11,23 --hdf5
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from solislab.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
