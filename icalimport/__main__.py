"""Entry point for `python -m icalimport`."""

from icalimport.cli import main_entry

if __name__ == "__main__":
    main_entry()
