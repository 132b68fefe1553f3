"""
The SOLVERS layer: closed-form and sparse-linear equilibrium predictions used
to check where the live simulation should settle.
"""
