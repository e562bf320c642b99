"""
Asset record model and reference catalog.
"""
