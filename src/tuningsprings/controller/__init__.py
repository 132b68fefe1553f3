"""
The CONTROLLER layer: the simulation session and the adapters that feed it
(MIDI input, pointer drag) or consume it (audio voices).
"""
