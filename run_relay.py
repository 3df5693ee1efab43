#!/usr/bin/env python3
"""
Run the Live Voice Relay.

This script starts the HTTP status server and the Discord relay bot.
"""

import sys
from pathlib import Path

# Add src directory to Python path
src_path = Path(__file__).parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from live_voice_relay.main import main

if __name__ == "__main__":
    main()
