import math

GRAVITY = 9.81  # m/s2

# resistance used for closed links, see closed_head_loss
HIGH_RESISTANCE = 1.0e10
# floor for every head loss gradient handed to the solver
MIN_GRADIENT = 1.0e-6
# flow tolerance (m3/s) below which a pressure valve is considered to be in reverse flow
ZERO_FLOW = 1.0e-6

MIN_LOSS_COEFF = 0.1
# converts a minor loss coefficient on a V^2/2g basis to a Q^2 basis, divided by d^4
LOSS_FACTOR_CONVERSION = 8.0 / (GRAVITY * math.pi**2)

# flow velocity (1 ft/s) used to derive a valve's initial flow
INITIAL_VELOCITY = 0.3048
