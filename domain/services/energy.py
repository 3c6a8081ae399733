"""
Energy expenditure estimate for strength sessions.

Formula: kcal = MET x body weight (kg) x duration (hours)
"""

DEFAULT_MET = 6.0
DEFAULT_BODY_WEIGHT_KG = 80.0


def estimate_active_energy(
    duration_seconds: float,
    body_weight_kg: float = DEFAULT_BODY_WEIGHT_KG,
    met: float = DEFAULT_MET,
) -> float:
    """
    Estimate active energy burned during a session.

    Args:
        duration_seconds: Session duration
        body_weight_kg: User body weight
        met: Metabolic equivalent of the activity (6.0 for vigorous lifting)

    Returns:
        Estimated kilocalories, rounded to 1 decimal place
    """
    if duration_seconds <= 0:
        return 0.0
    hours = duration_seconds / 3600.0
    return round(met * body_weight_kg * hours, 1)
