"""
Deterministic quantity takeoff engine.

Pure Python math. No I/O, no state between calls.
Given raw form fields for a job, produce a bill of quantities.
"""
