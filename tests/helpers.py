import math


def values_equal(a, b):
    """Same Ember value: same type, NaN equals NaN, -0 and 0 differ."""
    if type(a) is not type(b):
        return False
    if isinstance(a, float) and math.isnan(a):
        return math.isnan(b)
    if isinstance(a, float):
        return a == b and math.copysign(1.0, a) == math.copysign(1.0, b)
    return a == b
