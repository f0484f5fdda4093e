# simulations/__init__.py
"""
Headless runs, method comparisons and the interactive viewer for pi_drop.

Run via:
    python -m simulations.compare --method-a sqrt_polar --method-b naive_polar --balls 20000
    python -m simulations.visualize
"""
