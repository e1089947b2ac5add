"""matlab-when core library.

Answers "in which MATLAB release was this function introduced?" by scraping
the version markers MathWorks embeds in its webdocs reference pages.

Rules of thumb:
- Webdocs markup is not a stable API; every scraping rule lives in
  ``extract`` so a markup change touches one module.
- Nothing is cached or persisted between queries.
"""

from __future__ import annotations

from .lookup import iter_outcomes, when

__all__ = ["__version__", "iter_outcomes", "when"]

__version__ = "0.1.0"
