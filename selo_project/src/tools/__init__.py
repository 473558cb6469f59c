"""Engine adapters for Selo.

Each module in this package bridges exactly one external geometry engine
(overlay, buffer, triangulation). They only reshape coordinates and fix
winding at the boundary; the geometric policy lives in
:mod:`selo_project.src.core.geometry`.
"""
