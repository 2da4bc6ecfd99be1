"""
profileeditor - availability and service catalog editing for marketplace profiles.
"""

__version__ = "0.1.0"
