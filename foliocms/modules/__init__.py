"""
FolioCMS Modules
================

Flask blueprint modules for the portfolio content API.
"""

__all__ = ['auth', 'ops', 'projects']
