"""
The ANALYSIS layer: the note registry, the spring graph and the activation
state machine that keeps the physics working set consistent.
"""
