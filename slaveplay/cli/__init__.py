"""
Command line interface for slaveplay.
"""
