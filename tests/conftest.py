"""
Shared fixtures for the NHIS heart-attack pipeline tests.

Synthetic survey extracts stand in for the real IPUMS file: every generated
"eligible" row passes all filters and sentinel checks, and the label follows
age and BMI so the SVMs have something to learn.
"""
import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from heartsvm import config


def _label_rule(age: np.ndarray, bmi: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    label = ((age >= 60) & (bmi >= 29)).astype(int)
    flip = rng.random(len(age)) < 0.03
    return np.where(flip, 1 - label, label)


@pytest.fixture
def make_raw_survey():
    """
    Factory for raw survey extracts with n_eligible fully valid adult-male rows.

    Some eligible rows carry the recodable codes (HRSLEEP 25, MODMIN/VIGMIN
    996) so recodes are exercised. Extra non-analysis columns are included.
    """
    def _make(n_eligible: int, seed: int = 0) -> pd.DataFrame:
        rng = np.random.default_rng(seed)

        age = rng.integers(18, 86, n_eligible)
        bmi = np.round(rng.uniform(18.0, 42.0, n_eligible), 2)
        label = _label_rule(age, bmi, rng)

        hrsleep = rng.integers(4, 11, n_eligible)
        hrsleep[rng.random(n_eligible) < 0.02] = config.SLEEP_HOURS_SENTINEL
        modmin = rng.integers(0, 121, n_eligible)
        modmin[rng.random(n_eligible) < 0.02] = config.ACTIVITY_MINUTES_SENTINEL
        vigmin = rng.integers(0, 91, n_eligible)
        vigmin[rng.random(n_eligible) < 0.02] = config.ACTIVITY_MINUTES_SENTINEL

        return pd.DataFrame({
            "YEAR": rng.integers(1997, 2019, n_eligible),
            "SERIAL": np.arange(1, n_eligible + 1),
            "ASTATFLG": 1,
            "SEX": 1,
            "AGE": age,
            "BMICALC": bmi,
            "HRSLEEP": hrsleep,
            "MODMIN": modmin,
            "VIGMIN": vigmin,
            "FRUTNO": rng.integers(0, 30, n_eligible),
            "VEGENO": rng.integers(0, 30, n_eligible),
            "SODAPNO": rng.integers(0, 30, n_eligible),
            "ALCDAYSYR": rng.integers(0, 366, n_eligible),
            "HEARTATTEV": label + 1,
            "PERWEIGHT": rng.uniform(500, 5000, n_eligible),
        })

    return _make


@pytest.fixture
def ineligible_rows(make_raw_survey):
    """
    Rows that each fail exactly one eligibility predicate.
    """
    base = make_raw_survey(7, seed=99)
    base["HEARTATTEV"] = base["HEARTATTEV"].astype(float)
    base.loc[0, "YEAR"] = 1996
    base.loc[1, "ASTATFLG"] = 0
    base.loc[2, "SEX"] = 2
    base.loc[3, "HEARTATTEV"] = 9
    base.loc[4, "HEARTATTEV"] = 0
    base.loc[5, "ALCDAYSYR"] = 997
    base.loc[6, "HEARTATTEV"] = np.nan
    return base


@pytest.fixture
def sentinel_rows(make_raw_survey):
    """
    Eligible rows that each hold one sentinel code or a missing value.
    """
    base = make_raw_survey(9, seed=98)
    base["VEGENO"] = base["VEGENO"].astype(float)
    base.loc[0, "AGE"] = 997
    base.loc[1, "BMICALC"] = 996
    base.loc[2, "BMICALC"] = 0
    base.loc[3, "HRSLEEP"] = 99
    base.loc[4, "MODMIN"] = 998
    base.loc[5, "VIGMIN"] = 999
    base.loc[6, "FRUTNO"] = 996
    base.loc[7, "SODAPNO"] = 997
    base.loc[8, "VEGENO"] = np.nan
    return base


@pytest.fixture
def raw_survey_with_noise(make_raw_survey, ineligible_rows, sentinel_rows):
    """
    Factory: n_eligible valid rows plus ineligible and sentinel rows, shuffled.
    """
    def _make(n_eligible: int, seed: int = 0) -> pd.DataFrame:
        df = pd.concat(
            [make_raw_survey(n_eligible, seed=seed), ineligible_rows, sentinel_rows],
            ignore_index=True
        )
        return df.sample(frac=1.0, random_state=seed).reset_index(drop=True)

    return _make


@pytest.fixture
def make_modeling_data():
    """
    Factory for modeling-ready DataFrames (config.FEATURE_COLUMNS + label).
    """
    def _make(n_rows: int, seed: int = 0) -> pd.DataFrame:
        rng = np.random.default_rng(seed)

        age = rng.integers(18, 86, n_rows)
        bmi = np.round(rng.uniform(18.0, 42.0, n_rows), 2)

        return pd.DataFrame({
            "AGE": age,
            "BMICALC": bmi,
            "HRSLEEP": rng.integers(0, 13, n_rows),
            "MODMIN": rng.integers(0, 121, n_rows),
            "VIGMIN": rng.integers(0, 91, n_rows),
            "FRUTNO": rng.integers(0, 30, n_rows),
            "VEGENO": rng.integers(0, 30, n_rows),
            "SODAPNO": rng.integers(0, 30, n_rows),
            "ALCDAYSMO": rng.integers(0, 31, n_rows),
            "HEARTATTACK": _label_rule(age, bmi, rng),
        })

    return _make


@pytest.fixture
def small_grids():
    """Tiny per-kernel grids that keep grid searches fast."""
    return {
        "linear": {"C": [0.1, 1]},
        "rbf": {"C": [1, 10], "gamma": [0.1]},
        "poly": {"C": [1], "degree": [2, 3]},
    }
