"""
Core definitions for modelfactory.
"""
