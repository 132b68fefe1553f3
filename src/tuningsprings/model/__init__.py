"""
The MODEL layer contains pure data structures and musical logic.
It has NO knowledge of the physics adapter or of Qt.
It deals with the pitch axis, intervals, tunings, stiffness curves and
the configuration surface.
"""
