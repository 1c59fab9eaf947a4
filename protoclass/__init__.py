"""
protoclass: detection of prototype-based inheritance in JavaScript syntax trees.
"""

__version__ = "0.1.0"
