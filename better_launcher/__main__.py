from __future__ import annotations

from better_launcher.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
