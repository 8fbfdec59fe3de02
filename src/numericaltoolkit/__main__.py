"""Command-line entry point: runs the example programs."""
from numericaltoolkit.main import main

if __name__ == "__main__":
    main()
