"""
Control MPlayer through its slave-mode line protocol.
"""

__version__ = "0.1.0"
