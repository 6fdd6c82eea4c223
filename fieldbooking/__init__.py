"""
fieldbooking - Sports field catalogue and weekly availability scheduling.
"""

__version__ = "0.1.0"
