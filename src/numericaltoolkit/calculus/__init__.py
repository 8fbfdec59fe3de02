"""
Calculus
========
Cubic spline interpolation and closed-form integration rules.
"""
