"""
Shardbound - rules engine and match server for the Shardbound card game.
"""

__version__ = "0.1.0"
