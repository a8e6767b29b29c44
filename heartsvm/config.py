"""
Configuration module for the NHIS heart-attack SVM analysis.

Contains all constants, file paths, column names, sentinel codes and
hyperparameter grids used throughout the pipeline.
"""
from pathlib import Path
from typing import List, Dict, Any

# ============================================================================
# FILE PATHS
# ============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
RAW_DATA_PATH = PROJECT_ROOT / "data" / "raw" / "nhis_extract.csv"
REPORTS_DIR = PROJECT_ROOT / "reports" / "figures"

# ============================================================================
# RAW COLUMNS
# ============================================================================
YEAR_COLUMN = "YEAR"
STATUS_FLAG_COLUMN = "ASTATFLG"
SEX_COLUMN = "SEX"
HEART_ATTACK_COLUMN = "HEARTATTEV"
ALCOHOL_YEARLY_COLUMN = "ALCDAYSYR"
AGE_COLUMN = "AGE"
BMI_COLUMN = "BMICALC"
SLEEP_HOURS_COLUMN = "HRSLEEP"
MODERATE_MINUTES_COLUMN = "MODMIN"
VIGOROUS_MINUTES_COLUMN = "VIGMIN"
FRUIT_FREQ_COLUMN = "FRUTNO"
VEGETABLE_FREQ_COLUMN = "VEGENO"
SODA_FREQ_COLUMN = "SODAPNO"

# Fixed subset read from the extract; everything else is ignored
RAW_COLUMNS: List[str] = [
    YEAR_COLUMN,
    STATUS_FLAG_COLUMN,
    SEX_COLUMN,
    AGE_COLUMN,
    BMI_COLUMN,
    SLEEP_HOURS_COLUMN,
    MODERATE_MINUTES_COLUMN,
    VIGOROUS_MINUTES_COLUMN,
    FRUIT_FREQ_COLUMN,
    VEGETABLE_FREQ_COLUMN,
    SODA_FREQ_COLUMN,
    ALCOHOL_YEARLY_COLUMN,
    HEART_ATTACK_COLUMN,
]

# ============================================================================
# ELIGIBILITY FILTERS
# ============================================================================
MIN_SURVEY_YEAR = 1997
SAMPLE_ADULT_FLAG = 1
MALE_CODE = 1
VALID_HEART_ATTACK_CODES = [1, 2]  # 1=No, 2=Yes
ALCOHOL_YEARLY_SENTINEL_MIN = 995  # 995-999: unknown/refused/not ascertained

# ============================================================================
# SENTINEL CODES - ROWS HOLDING ANY OF THESE ARE DROPPED
# ============================================================================
SENTINEL_VALUES: Dict[str, List[float]] = {
    AGE_COLUMN: [997, 998, 999],
    BMI_COLUMN: [0, 996],
    SLEEP_HOURS_COLUMN: [97, 98, 99],
    MODERATE_MINUTES_COLUMN: [997, 998, 999],
    VIGOROUS_MINUTES_COLUMN: [997, 998, 999],
    FRUIT_FREQ_COLUMN: [996, 997, 998, 999],
    VEGETABLE_FREQ_COLUMN: [996, 997, 998, 999],
    SODA_FREQ_COLUMN: [996, 997, 998, 999],
}

# ============================================================================
# RECODES
# ============================================================================
ALCOHOL_MONTHLY_COLUMN = "ALCDAYSMO"
MONTHS_PER_YEAR = 12

# 996 = "unable to do this type of activity"
ACTIVITY_MINUTES_COLUMNS = [MODERATE_MINUTES_COLUMN, VIGOROUS_MINUTES_COLUMN]
ACTIVITY_MINUTES_SENTINEL = 996
ACTIVITY_MINUTES_CEILING = 720

# 25 = "less than half an hour"
SLEEP_HOURS_SENTINEL = 25
SLEEP_HOURS_REPLACEMENT = 0

# ============================================================================
# TARGET DEFINITION
# ============================================================================
TARGET_COLUMN = "HEARTATTACK"
TARGET_OFFSET = 1  # HEARTATTEV 1/2 -> 0/1

# Columns no longer needed once the label and monthly alcohol rate exist
DROP_COLUMNS: List[str] = [
    HEART_ATTACK_COLUMN,
    YEAR_COLUMN,
    STATUS_FLAG_COLUMN,
    ALCOHOL_YEARLY_COLUMN,
    SEX_COLUMN,
]

FEATURE_COLUMNS: List[str] = [
    AGE_COLUMN,
    BMI_COLUMN,
    SLEEP_HOURS_COLUMN,
    MODERATE_MINUTES_COLUMN,
    VIGOROUS_MINUTES_COLUMN,
    FRUIT_FREQ_COLUMN,
    VEGETABLE_FREQ_COLUMN,
    SODA_FREQ_COLUMN,
    ALCOHOL_MONTHLY_COLUMN,
]

# ============================================================================
# REPORTING
# ============================================================================
SCATTER_X_COLUMN = AGE_COLUMN
SCATTER_Y_COLUMN = BMI_COLUMN

# ============================================================================
# TRAINING CONFIGURATION
# ============================================================================
RANDOM_STATE = 1
TRAIN_SIZE = 6000
CV_FOLDS = 10
N_JOBS = -1

KERNELS: List[str] = ["linear", "rbf", "poly"]

# Feature subsets differ per kernel: diet frequencies are left out of the
# radial model, activity and sleep are left out of the polynomial one.
KERNEL_SPECS: Dict[str, Dict[str, Any]] = {
    "linear": {
        "param_grid": {"C": [0.001, 0.01, 0.1, 1, 5, 10, 100]},
        "exclude": [],
    },
    "rbf": {
        "param_grid": {"C": [0.1, 1, 10, 100], "gamma": [0.01, 0.1, 0.5, 1]},
        "exclude": [FRUIT_FREQ_COLUMN, VEGETABLE_FREQ_COLUMN, SODA_FREQ_COLUMN],
    },
    "poly": {
        "param_grid": {"C": [0.1, 1, 10], "degree": [2, 3, 4]},
        "exclude": [SLEEP_HOURS_COLUMN, MODERATE_MINUTES_COLUMN, VIGOROUS_MINUTES_COLUMN],
    },
}
