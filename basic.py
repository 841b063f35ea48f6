#!/usr/bin/env python3
"""
BASIC interpreter entry point.

Usage: python basic.py program.bas [--canvas out.pgm] [--verbose]
"""

from linebasic.interpreter import main

if __name__ == '__main__':
    main()
