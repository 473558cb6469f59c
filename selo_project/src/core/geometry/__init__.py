"""Geometry algorithms: intersection, orientation, boolean ops, offsetting,
triangulation and the repair passes (split, simplify, grouping)."""
