"""
Pytest configuration and fixtures.
"""

import numpy as np
import pandas as pd
import pytest

from colnorm.core.config import NormalizationConfig, get_settings


@pytest.fixture
def small_matrix() -> np.ndarray:
    """3 samples x 2 features with column means [3, 4]."""
    return np.array([
        [1.0, 2.0],
        [3.0, 4.0],
        [5.0, 6.0],
    ])


@pytest.fixture
def skewed_matrix() -> np.ndarray:
    """Strictly positive columns on very different scales."""
    return np.array([
        [0.02, 18.0, 296.0, 4.98],
        [0.03, 0.0, 242.0, 9.14],
        [0.03, 0.0, 242.0, 4.03],
        [0.03, 0.0, 222.0, 2.94],
        [0.07, 0.0, 222.0, 5.33],
        [0.09, 12.5, 311.0, 12.43],
        [8.98, 0.0, 666.0, 30.81],
    ])


@pytest.fixture
def housing_train() -> pd.DataFrame:
    """Small training split with Boston housing feature names."""
    return pd.DataFrame({
        "CRIM": [0.1, 1.0, 10.0, 100.0],
        "ZN": [0.0, 10.0, 20.0, 30.0],
        "CHAS": [0, 1, 0, 1],
        "NOX": [0.4, 0.5, 0.6, 0.8],
        "RM": [5.0, 6.0, 7.0, 6.0],
        "PTRATIO": [15.0, 17.0, 19.0, 21.0],
    })


@pytest.fixture
def housing_test() -> pd.DataFrame:
    """Held-out split with the same columns as housing_train."""
    return pd.DataFrame(
        {
            "CRIM": [1000.0, 0.01],
            "ZN": [15.0, 0.0],
            "CHAS": [1, 0],
            "NOX": [0.6, 1.0],
            "RM": [6.0, 8.0],
            "PTRATIO": [18.0, 15.0],
        },
        index=[10, 11],
    )


@pytest.fixture
def housing_config_dict() -> dict:
    """Per-column methods for the housing fixtures (PTRATIO uses the default)."""
    return {
        "normalization": {
            "default_method": "zscore",
            "warn_on_zero_scale": True,
            "features": {
                "CRIM": {"method": "log"},
                "ZN": {"method": "robust"},
                "CHAS": {"method": "passthrough"},
                "NOX": {"method": "minmax"},
                "RM": {"method": "zscore"},
            },
        }
    }


@pytest.fixture
def housing_config(housing_config_dict: dict) -> NormalizationConfig:
    """NormalizationConfig built from housing_config_dict."""
    return NormalizationConfig.from_dict(housing_config_dict)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached Settings so env overrides in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
