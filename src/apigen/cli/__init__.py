"""CLI package.

The ``cli`` sub-package contains the Click application and its
commands.  Commands import the pipeline lazily so that ``apigen
--help`` stays fast.
"""
from __future__ import annotations
