# Star Canton Layout Optimizer — Layered Architecture
# Layer 1: kinds.py     — layout tuples & the six canton patterns (classifier)
# Layer 2: generator.py — exhaustive enumeration of layouts for N stars
# Layer 3: optimizer.py — best-fit search against a canton aspect ratio
# Layer 4: geometry.py  — flag measurements & relative star coordinates
