"""Engine-wide constants."""

# 100 years of monthly periods; amortization runs past this are reported as DidNotConverge.
MAX_PERIODS = 1200

# Residue (in cents) folded into the final payment instead of spawning another period.
EPSILON_CENTS = 1

MAX_HORIZON_YEARS = 100

# BAC level treated as sober.
SOBER_THRESHOLD = 0.001
