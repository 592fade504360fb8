"""Entry point for the cache simulator.

Usage:
    python run.py -s 4 -E 1 -b 4 -t traces/yi.trace
    python run.py -v -s 8 -E 2 -b 4 -t traces/yi.trace
"""
from cachesim.cli import main


if __name__ == '__main__':
    main()
