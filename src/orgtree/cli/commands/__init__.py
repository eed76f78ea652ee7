"""
CLI command modules for orgtree.

Each module exposes one click command registered by cli.main.
"""
