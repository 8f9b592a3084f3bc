#!/usr/bin/env python
"""
Script to run a console order board for one staff role
"""
import sys

from order_board.board import main

if __name__ == "__main__":
    sys.exit(main())
