"""
Body composition from profile measurements: BMR (Mifflin-St Jeor), TDEE,
body fat (US Navy), lean body mass, FFMI (height-normalized) and waist-to-hip ratio.
"""

import math

from app.schemas.analytics import BodyComposition
from app.schemas.profile import UserProfile

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "Sedentary": 1.2,
    "Lightly Active": 1.375,
    "Active": 1.55,
    "Very Active": 1.725,
}
DEFAULT_ACTIVITY = "Active"
UNKNOWN_ACTIVITY_MULTIPLIER = 1.2

BODY_FAT_MIN = 2.0
BODY_FAT_MAX = 60.0
FFMI_REFERENCE_HEIGHT_M = 1.8


def _navy_body_fat(profile: UserProfile) -> float | None:
    """US Navy estimate (cm inputs); None when measurements are missing or degenerate."""
    waist, neck, hips, height = profile.waist, profile.neck, profile.hips, profile.height_cm
    if not (waist and neck and height):
        return None
    if profile.gender == "male":
        if waist <= neck:
            return None
        return 495 / (1.0324 - 0.19077 * math.log10(waist - neck) + 0.15456 * math.log10(height)) - 450
    if not hips or waist + hips <= neck:
        return None
    return 495 / (1.29579 - 0.35004 * math.log10(waist + hips - neck) + 0.22100 * math.log10(height)) - 450


def calculate_body_composition(profile: UserProfile) -> BodyComposition:
    weight, height, age, gender = profile.current_weight, profile.height_cm, profile.age, profile.gender
    if not (weight and height and age and gender):
        return BodyComposition()

    bmr = 10 * weight + 6.25 * height - 5 * age
    bmr += 5 if gender == "male" else -161

    activity = profile.lifestyle_activity or DEFAULT_ACTIVITY
    tdee = bmr * ACTIVITY_MULTIPLIERS.get(activity, UNKNOWN_ACTIVITY_MULTIPLIER)

    body_fat = _navy_body_fat(profile)
    if body_fat is None:
        body_fat = profile.body_fat
    if body_fat:
        body_fat = max(BODY_FAT_MIN, min(BODY_FAT_MAX, round(body_fat, 1)))
    else:
        body_fat = None

    lbm = weight * (1 - body_fat / 100) if body_fat else 0.0

    height_m = height / 100
    ffmi = 0.0
    if lbm > 0:
        ffmi = lbm / (height_m * height_m) + 6.1 * (FFMI_REFERENCE_HEIGHT_M - height_m)

    whr = round(profile.waist / profile.hips, 2) if profile.waist and profile.hips else None

    return BodyComposition(
        bmr=round(bmr),
        tdee=round(tdee),
        lbm=round(lbm, 1),
        body_fat=body_fat,
        ffmi=round(ffmi, 1),
        whr=whr,
    )
