"""
Solvers
=======
Root finding and unconstrained optimization expressed as update rules
for the iterative engine.
"""
