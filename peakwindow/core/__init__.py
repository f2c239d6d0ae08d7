"""Core primitives: the sliding window max tracker and its float form.

The tracker keeps a deque of candidates sorted by value, expiring the max
when its ring buffer slot comes round again and dropping dominated values
from the other end, so each new value costs O(1) amortized.
"""
