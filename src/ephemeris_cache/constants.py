"""Physical constants and rendering scale used by the derived caches."""

AU_TO_METERS = 1.496e11
SUN_GM = 1.327e20  # m^3/s^2

# 1 AU = 10 render units
SCALE_FACTOR = 10

ASTRONOMICAL_CONSTANTS = {
    "AU_TO_METERS": AU_TO_METERS,
    "SUN_GM": SUN_GM,
    "SCALE_FACTOR": SCALE_FACTOR,
}
