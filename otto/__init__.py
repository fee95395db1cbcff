"""
Otto - container dashboard for the local engine.
"""

__version__ = '0.1.0'
