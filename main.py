#!/usr/bin/env python3
"""ReadySetBeep entry point.

Run with:
    python main.py
    python -m readysetbeep
"""

from readysetbeep.__main__ import main


if __name__ == "__main__":
    main()
