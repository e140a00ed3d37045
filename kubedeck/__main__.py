"""Entry point: python -m kubedeck"""

from kubedeck.main import main

if __name__ == "__main__":
    main()
