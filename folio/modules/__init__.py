"""
Folio Modules
=============

Feature blueprints: one per content collection, plus the site module
serving the front-end.
"""

__all__ = ['messages', 'projects', 'videos', 'hero_photos', 'resume', 'site']
