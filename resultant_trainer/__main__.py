"""Launch the Resultant Trainer window.

``python -m resultant_trainer`` and the ``resultant-trainer`` console script
both land in :func:`main`. Running this file directly also works; the project
root is then put on ``sys.path`` first.
"""

from __future__ import annotations

import sys
from pathlib import Path

if __package__:
    from .app import run
else:
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
    from resultant_trainer.app import run


def main() -> int:
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
