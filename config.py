# config.py
# Central configuration for the data splitting defaults

# --- Random seed ---
# Same seed + same data + same policy gives the same split
RANDOM_SEED = 42

# --- Proportions ---
# Fraction of rows spent on training in a two-way split (rest goes to testing)
TRAIN_PROPORTION = 0.75
# (training, validation) fractions for a three-way split; testing gets the rest
VALIDATION_PROPORTIONS = (0.6, 0.2)
# Allowed distance between sum(proportions) and 1.0
PROPORTION_TOLERANCE = 1e-6

# --- Stratification ---
# Number of bins for a continuous strata column (4 = quartiles)
STRATA_BREAKS = 4

# --- Logging ---
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s'
