"""Allow running gaugebuild as `python -m gaugebuild`."""

from gaugebuild.cli import main

if __name__ == "__main__":
    main()
