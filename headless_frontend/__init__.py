"""Map headless CMS responses into typed pages, menus and taxonomy terms.

This package loads a YAML content schema, resolves raw WordPress or Craft CMS
field values into typed content fields, and exposes pagination, menus and
terms for view templates. It also ships the ``frontend`` console script.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from headless_frontend import main
>>> main()  # doctest: +SKIP
>>> from headless_frontend import app
>>> app(["schema", "--config", "config/content.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
