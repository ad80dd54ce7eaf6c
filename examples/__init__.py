"""Example scripts for staticsync.

Available examples:

basic_usage.py
    Declare a pair, propagate the newer file, equalize timestamps of
    touched files, and run a single scheduler pass.

Run it:
    python examples/basic_usage.py
"""
