"""
Data layer: asset record shapes and reference datasets.
"""
