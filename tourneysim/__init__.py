"""
Monte-Carlo Swiss tournament simulator.
"""

__version__ = "0.1.0"
