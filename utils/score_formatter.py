"""
Score formatting utilities for TruScore
Maps composite (0-100) and pillar (0-25) scores to display bands and colours
"""

from typing import Optional, Union

COLOR_EXCELLENT = "#16a085"
COLOR_GOOD = "#4dd09f"
COLOR_FAIR = "#ffd93d"
COLOR_POOR = "#ff6b6b"

# (min score, label, colour), highest band first
COMPOSITE_BANDS = [
    (80, "Excellent", COLOR_EXCELLENT),
    (60, "Good", COLOR_GOOD),
    (40, "Fair", COLOR_FAIR),
]

PILLAR_BANDS = [
    (20, COLOR_EXCELLENT),
    (15, COLOR_GOOD),
    (10, COLOR_FAIR),
]


def format_score_display(score: Optional[Union[float, int]], include_max: bool = True) -> str:
    """
    Format a composite score for display with an optional "/ 100" suffix

    Args:
        score: Composite score on the 0-100 scale
        include_max: If True, append "/ 100" to the score

    Returns:
        Formatted score string (e.g., "83 / 100" or "83")
    """
    display = 0 if score is None else int(score)
    if include_max:
        return f"{display} / 100"
    return str(display)


def get_score_label(score: Optional[Union[float, int]]) -> str:
    """
    Get the band label for a composite score

    Returns:
        "Excellent", "Good", "Fair" or "Poor"
    """
    value = score or 0
    for threshold, label, _ in COMPOSITE_BANDS:
        if value >= threshold:
            return label
    return "Poor"


def get_score_color(score: Optional[Union[float, int]]) -> str:
    value = score or 0
    for threshold, _, color in COMPOSITE_BANDS:
        if value >= threshold:
            return color
    return COLOR_POOR


def get_pillar_color(value: Optional[Union[float, int]]) -> str:
    """Colour for a single pillar value (0-25)."""
    value = value or 0
    for threshold, color in PILLAR_BANDS:
        if value >= threshold:
            return color
    return COLOR_POOR
