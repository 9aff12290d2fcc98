"""
Event surface exposed to the host adapter.
"""
