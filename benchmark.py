#!/usr/bin/env python3
"""
Convenience entry point for the step benchmark.

Usage:
    python benchmark.py                         # 1k, 10k, 100k agents
    python benchmark.py --agents 5000 50000     # Custom counts
"""

from tools.benchmark import main

if __name__ == "__main__":
    main()
