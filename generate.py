#!/usr/bin/env python3
"""Serverless Python Generator - Entry Point.

This is the main entry point for the Serverless Python Generator. The
functionality lives in the slsgen package.
"""

from __future__ import annotations

import sys

from slsgen.main import main

if __name__ == "__main__":
    sys.exit(main())
