"""
Tests for the DataFrame normalization pipeline.
"""

import logging

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_allclose

from colnorm.core.config import NormalizationConfig
from colnorm.core.exceptions import NormalizationError, ValidationError
from colnorm.core.types import NormalizationMethod
from colnorm.normalization.pipeline import NormalizationPipeline


@pytest.fixture
def pipeline(housing_config: NormalizationConfig) -> NormalizationPipeline:
    """Pipeline using the housing fixture config."""
    return NormalizationPipeline(config=housing_config)


class TestMethodSelection:
    """Tests for per-column method lookup."""

    def test_configured_methods(self, pipeline: NormalizationPipeline):
        """Configured columns use their own method."""
        assert pipeline.get_method("CRIM") == NormalizationMethod.LOG
        assert pipeline.get_method("ZN") == NormalizationMethod.ROBUST
        assert pipeline.get_method("CHAS") == NormalizationMethod.PASSTHROUGH

    def test_unconfigured_uses_default(self, pipeline: NormalizationPipeline):
        """Columns without an entry fall back to the default method."""
        assert pipeline.get_method("PTRATIO") == NormalizationMethod.ZSCORE


class TestFitTransform:
    """Tests for fitting and transforming frames."""

    def test_fit_transform_applies_each_method(
        self,
        pipeline: NormalizationPipeline,
        housing_train: pd.DataFrame,
    ):
        """Each column is normalized with its configured method."""
        result = pipeline.fit_transform(housing_train)

        assert list(result.columns) == list(housing_train.columns)
        assert_allclose(result["CRIM"], [-1.0, 0.0, 1.0, 2.0])
        assert_allclose(result["CHAS"], [0.0, 1.0, 0.0, 1.0])
        assert_allclose(result["NOX"], [0.0, 0.25, 0.5, 1.0])
        assert_allclose(result["RM"].mean(), 0.0, atol=1e-12)
        assert_allclose(result["RM"].std(ddof=0), 1.0)
        # ZN [0, 10, 20, 30]: median 15, Q1 7.5, Q3 22.5
        assert_allclose(result["ZN"], [-1.0, -1 / 3, 1 / 3, 1.0])

    def test_transform_reuses_training_stats(
        self,
        pipeline: NormalizationPipeline,
        housing_train: pd.DataFrame,
        housing_test: pd.DataFrame,
    ):
        """Held-out data is scaled with training statistics, not its own."""
        pipeline.fit(housing_train)
        result = pipeline.transform(housing_test)

        assert list(result.index) == [10, 11]
        assert_allclose(result["CRIM"], [3.0, -2.0])
        assert_allclose(result["ZN"], [0.0, -1.0])
        # NOX fitted on [0.4, 0.8]: held-out 1.0 lands above 1
        assert_allclose(result["NOX"], [0.5, 1.5])
        # PTRATIO fitted mean 18, std sqrt(5)
        assert_allclose(result["PTRATIO"], [0.0, -3 / np.sqrt(5)])

    def test_transform_does_not_mutate_input(
        self,
        pipeline: NormalizationPipeline,
        housing_train: pd.DataFrame,
    ):
        """Input frame is left untouched."""
        original = housing_train.copy()
        pipeline.fit_transform(housing_train)
        pd.testing.assert_frame_equal(housing_train, original)

    def test_non_numeric_columns_are_skipped(
        self,
        pipeline: NormalizationPipeline,
        housing_train: pd.DataFrame,
    ):
        """String columns are left out of the fitted columns."""
        frame = housing_train.assign(TOWN=["a", "b", "c", "d"])
        result = pipeline.fit_transform(frame)

        assert "TOWN" not in result.columns

    def test_transform_before_fit_raises(
        self,
        pipeline: NormalizationPipeline,
        housing_test: pd.DataFrame,
    ):
        """Transform requires fitted stats."""
        assert not pipeline.is_fitted
        with pytest.raises(NormalizationError):
            pipeline.transform(housing_test)

    def test_stats_before_fit_raises(self, pipeline: NormalizationPipeline):
        """Stats are unavailable until fit."""
        with pytest.raises(NormalizationError):
            _ = pipeline.stats

    def test_missing_column_raises(
        self,
        pipeline: NormalizationPipeline,
        housing_train: pd.DataFrame,
        housing_test: pd.DataFrame,
    ):
        """Held-out frames must carry every fitted column."""
        pipeline.fit(housing_train)

        with pytest.raises(ValidationError) as exc:
            pipeline.transform(housing_test.drop(columns=["RM"]))

        assert exc.value.value == ["RM"]

    def test_non_numeric_held_out_column_raises(
        self,
        pipeline: NormalizationPipeline,
        housing_train: pd.DataFrame,
        housing_test: pd.DataFrame,
    ):
        """Strings in a fitted column fail fast with a ValidationError."""
        pipeline.fit(housing_train)

        with pytest.raises(ValidationError) as exc:
            pipeline.transform(housing_test.assign(RM=["six", "eight"]))

        assert exc.value.field == "columns"
        # RM shares the zscore group with PTRATIO
        assert exc.value.value == ["RM", "PTRATIO"]

    def test_duplicated_held_out_column_names_feature(
        self,
        pipeline: NormalizationPipeline,
        housing_train: pd.DataFrame,
        housing_test: pd.DataFrame,
    ):
        """A column label appearing twice no longer matches the fitted stats."""
        pipeline.fit(housing_train)
        frame = pd.concat([housing_test, housing_test[["RM"]]], axis=1)

        with pytest.raises(NormalizationError) as exc:
            pipeline.transform(frame)

        assert exc.value.method == "zscore"
        assert exc.value.feature == "RM, PTRATIO"
        assert "feature=RM, PTRATIO" in str(exc.value)

    def test_constant_column_gives_nan(self, housing_train: pd.DataFrame):
        """Constant zscore column yields NaN rather than an error."""
        pipeline = NormalizationPipeline(config=NormalizationConfig.from_dict({}))
        result = pipeline.fit_transform(housing_train.assign(PTRATIO=20.0))

        assert result["PTRATIO"].isna().all()

    def test_zero_scale_warnings_can_be_disabled(
        self,
        caplog: pytest.LogCaptureFixture,
    ):
        """warn_on_zero_scale: false silences constant-column and log warnings."""
        config = NormalizationConfig.from_dict({
            "normalization": {
                "warn_on_zero_scale": False,
                "features": {"CRIM": {"method": "log"}},
            }
        })
        frame = pd.DataFrame({"CRIM": [0.0, 1.0, 10.0], "TAX": [300.0, 300.0, 300.0]})

        with caplog.at_level(logging.WARNING, logger="colnorm"):
            result = NormalizationPipeline(config=config).fit_transform(frame)

        assert caplog.records == []
        assert np.isneginf(result["CRIM"].iloc[0])
        assert result["TAX"].isna().all()


class TestSummary:
    """Tests for the normalization summary."""

    def test_unfitted_summary(self, pipeline: NormalizationPipeline):
        """Unfitted pipeline reports no rows."""
        summary = pipeline.get_normalization_summary()

        assert summary["fitted"] is False
        assert summary["row_count"] == 0
        assert summary["feature_status"] == {}

    def test_fitted_summary(
        self,
        pipeline: NormalizationPipeline,
        housing_train: pd.DataFrame,
    ):
        """Fitted summary lists method and stats per column."""
        pipeline.fit(housing_train)
        summary = pipeline.get_normalization_summary()

        assert summary["fitted"] is True
        assert summary["row_count"] == 4
        assert summary["default_method"] == "zscore"

        zn = summary["feature_status"]["ZN"]
        assert zn["method"] == "robust"
        assert zn["median"] == pytest.approx(15.0)
        assert zn["iqr"] == pytest.approx(15.0)
