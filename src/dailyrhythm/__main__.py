"""Main entry point for the dailyrhythm package."""

from dailyrhythm.tracker.cli import main


if __name__ == "__main__":
    main()
