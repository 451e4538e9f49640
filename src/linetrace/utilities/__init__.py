"""
linetrace.utilities - Small helpers shared across commands and views.
"""
