"""
Entry Point Script (Bootstrap)
==============================
Development runner for the HR diagram viewer.

It sits outside the 'src' package and puts 'src' on sys.path so that
'from hrdiagram...' resolves without installing the package.

Usage:
    $ python run.py [path/to/stars.csv]
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from hrdiagram.main import main

if __name__ == "__main__":
    main()
