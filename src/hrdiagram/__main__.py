"""Allows `python -m hrdiagram [catalog.csv]`."""
from hrdiagram.main import main

if __name__ == "__main__":
    main()
