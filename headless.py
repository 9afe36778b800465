#!/usr/bin/env python3
"""
Convenience entry point for headless runs.

Usage:
    python headless.py                          # Defaults from config/boids.py
    python headless.py --ticks 2000             # Longer run
    python headless.py --set n_agents=2000      # Override any SimConfig field
"""

from tools.headless import main

if __name__ == "__main__":
    main()
