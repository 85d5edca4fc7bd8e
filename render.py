#!/usr/bin/env python3
"""
markstyle - Markdown to styled text converter

Simple usage:
    python render.py README.md                 # Prints text + attribute ranges as JSON
    python render.py README.md --format rich   # Preview styling in the terminal
    python render.py /folder/path              # Writes <name>.styled.json for each file
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from markstyle.cli import app

if __name__ == "__main__":
    app()
