"""
Core layout engine for orgtree.

Pure computations over in-memory data: tree building, layout, connector
geometry, path highlighting, expansion state and viewport transforms.
"""
