#!/usr/bin/env python3
"""
Convenience script to render the chart gallery.

This script provides easy access to the gallery command-line interface.
"""

import sys
from pathlib import Path

# Add the current directory to Python path
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

from chartgallery.gallery import main

if __name__ == "__main__":
    sys.exit(main())
