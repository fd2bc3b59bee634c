"""Serverless Python Generator library.

This package contains modules for the Serverless Python Generator CLI,
providing the interactive project configuration flow, the plugin selection
menu, and the generation of the serverless project skeleton.
"""

from __future__ import annotations

__version__ = "1.0.0"
