"""
orgtree: organization-hierarchy layout engine.

Turns flat "reports-to" records into a positioned tree diagram.
"""

__version__ = "0.1.0"
