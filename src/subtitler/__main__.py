"""Allow running as ``python -m subtitler``."""

from subtitler.cli import main

if __name__ == "__main__":
    main()
