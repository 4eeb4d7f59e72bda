"""
Library Core

Event engine components and shared types.
"""
