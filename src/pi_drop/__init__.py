# pi_drop/__init__.py
"""
Monte Carlo estimation of pi by dropping balls into a circle that has an
inscribed square.

    pi ~= 2 * (balls landed in circle) / (balls landed in square)

Core modules:
    sampler             -- area-uniform points in a disc, square membership
    convergence_tracker -- running counts, estimate, error and history
    animator            -- falling -> landed progression per tick
    simulation          -- the mutable state owned by the update loop
    commentary          -- optional natural-language insight (with fallback)
"""
