"""Calibration tables for the pillar scorers.

These tables centralize the anchors, tiers and rules so we can evolve the
curves without changing the compute logic. The numbers have no cited
clinical basis; they are kept exactly for behavioral compatibility.
"""

# (value, score) anchors, interpolated linearly; floor applied separately
SYSTOLIC_ANCHORS = [
    (110, 100),
    (120, 95),
    (130, 80),
    (140, 65),
    (160, 45),
    (180, 30),
    (200, 15),
]

DIASTOLIC_ANCHORS = [
    (75, 100),
    (80, 95),
    (85, 80),
    (90, 65),
    (100, 45),
    (110, 30),
    (120, 15),
]

BP_SCORE_FLOOR = 20

# (label, systolic below, diastolic below); last label catches the rest
BP_CATEGORIES = [
    ("Optimal", 120, 80),
    ("Normal", 130, 85),
    ("Elevated", 140, 90),
    ("Stage 1", 160, 100),
]
BP_CATEGORY_FALLBACK = "Stage 2"

# (average CV % above, penalty)
BP_VARIABILITY_PENALTIES = [
    (12, 15),
    (8, 10),
    (5, 5),
]

# Sleep duration in hours: symmetric bands around the 7-9h optimum
SLEEP_DURATION_BANDS = [
    (7.0, 9.0, 100),
    (6.5, 9.5, 85),
    (6.0, 10.0, 70),
    (5.5, 10.5, 55),
    (5.0, 11.0, 40),
]
SLEEP_DURATION_FLOOR = 25

# Deep + REM percentage, (at least, score)
RESTORATIVE_TIERS = [
    (45, 100),
    (40, 90),
    (35, 80),
    (30, 70),
    (25, 55),
    (20, 40),
]
RESTORATIVE_FLOOR = 25

# Resting HR, lower is better: (below, score)
RESTING_HR_TIERS = [
    (50, 100),
    (55, 90),
    (60, 80),
    (65, 70),
    (70, 60),
]
RESTING_HR_FLOOR = 45

# HRV high, higher is better: (at least, score)
HRV_TIERS = [
    (80, 100),
    (65, 85),
    (50, 70),
    (40, 55),
]
HRV_FLOOR = 40

SLEEP_NEUTRAL_SCORE = 70

SLEEP_WEIGHTS = {"duration": 0.4, "restorative": 0.3, "heart": 0.3}

# Duration std-dev in minutes
SLEEP_CONSISTENT_STDDEV = 30
SLEEP_INCONSISTENT_STDDEV = 60
SLEEP_CONSISTENCY_BONUS = 5

# Training-load level -> fixed status score; detraining/overreaching interpolate
TRAINING_LOAD_STATUS_SCORES = {
    "building": 90,
    "peak": 85,
    "maintaining": 75,
}
DETRAINING_STATUS_ANCHORS = [(0, 20), (14, 60)]
OVERREACHING_STATUS_ANCHORS = [(120, 60), (200, 40)]

# level -> (score when active today, score when resting today)
EFFORT_APPROPRIATENESS = {
    "detraining": (90, 30),
    "maintaining": (80, 65),
    "building": (90, 70),
    "peak": (75, 85),
    "overreaching": (35, 95),
}

CONSISTENCY_MULTIPLIER_ANCHORS = [(0.8, 30), (1.1, 95)]

ACTIVITY_WEIGHTS = {"training_load": 0.5, "effort": 0.3, "consistency": 0.2}

# Workouts in the previous 7 days -> consistency multiplier
CONSISTENCY_MULTIPLIERS = [
    (4, 1.1),
    (3, 1.0),
    (2, 0.9),
]
CONSISTENCY_MULTIPLIER_FLOOR = 0.8

# Ordered cross-metric rules: (reason, adjustment)
CROSS_METRIC_REASONS = {
    "poor_sleep_high_bp": ("Poor sleep and elevated BP are compounding health risks", -5),
    "excellent_sleep_bp": ("Excellent sleep and BP create a positive health synergy", 3),
    "active_poor_sleep": ("High activity with poor sleep risks overtraining", -3),
    "active_good_sleep": ("Good exercise-recovery balance", 2),
    "active_good_bp": ("Activity is supporting cardiovascular health", 2),
    "all_pillars_low": ("Multiple health areas need attention simultaneously", -5),
}

PILLAR_LABELS = {
    "bp": "Blood pressure",
    "sleep": "Sleep quality",
    "activity": "Activity",
}

HEALTH_SCORE_LABELS = [
    (80, "Excellent"),
    (65, "Good"),
    (50, "Fair"),
    (35, "Needs Attention"),
]
HEALTH_SCORE_LABEL_FLOOR = "Poor"
