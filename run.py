"""
Development runner for the Concave Hull Editor.

Puts 'src' on sys.path so the editor starts from a checkout without
installing it, then hands over to `concavehull.main.main`.

Usage:
    $ python run.py
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

# Own taskbar group and icon on Windows
appid = 'ConcaveHull.Editor'
try:
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(appid)
except (AttributeError, ImportError):
    # not Windows
    pass

from concavehull.main import main

if __name__ == "__main__":
    main()
