"""
Core package for the NEDC monitoring & evaluation dashboard.

Submodules provide record loading and normalisation, filtering, table views,
aggregation, the keyword assistant, and user interface rendering helpers that
are orchestrated by the top-level `app.py`.
"""
