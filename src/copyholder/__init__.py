"""
copyholder

Clipboard history tracker. Samples the text clipboard once a second, keeps
each new snippet with its capture time, lists them newest first, lets a
stored snippet be copied back, and prunes entries older than seven days.
"""

__version__ = "0.1.0"
