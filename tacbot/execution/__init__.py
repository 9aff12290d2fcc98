"""
tacbot.execution package
"""
