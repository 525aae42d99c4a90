#!/usr/bin/env python3
"""
extstats package
"""

__all__ = [
    "cli",
    "colors",
    "config",
    "errors",
    "models",
    "report",
    "sizes",
    "stats",
    "surface",
    "topk",
    "walker",
]

__version__ = "1.0.0"
