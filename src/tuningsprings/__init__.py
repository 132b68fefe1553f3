"""
Tuning Springs
==============
Interactive microtonal tuning on a 1-D pitch axis: notes are particles,
just-intonation intervals are springs, and a relaxation step lets the notes
drift toward the configuration of least tuning tension.
"""
