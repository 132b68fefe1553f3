"""
The PHYSICS layer: the particle/spring contract the tuning engine relies on
and a reference 1-D Verlet implementation of it.
"""
