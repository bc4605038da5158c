"""
CMS installer commands.

This package provides the shared setup helpers and the ``install``,
``project:set`` and ``build`` commands built on them.
"""
