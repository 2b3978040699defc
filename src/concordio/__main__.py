"""Allow ``python -m concordio``."""

from __future__ import annotations

from .cli import main

raise SystemExit(main())
