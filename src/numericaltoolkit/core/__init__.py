"""
Iterative Update Engine
=======================
Snapshot-isolated fixed-point engine shared by the solvers and the examples.

Note: This package should be pure Python and must not import matplotlib.
"""
