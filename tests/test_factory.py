"""
Tests for building MeanModel and ErrorFunction from configuration.
"""
import numpy as np
import pytest

from learnkit.config import ConfigValidationError, EnsembleConfig, ErrorFunctionConfig, MemberConfig
from learnkit.exceptions import InvalidArgumentError, PreconditionError
from learnkit.factory import (
    create_error_function,
    create_mean_model,
    load_error_function_config,
    load_mean_model_config,
)
from learnkit.losses import CrossEntropy, SquaredLoss
from learnkit.models import LinearModel, MeanModel
from learnkit.objectives import MiniBatchStrategy, TwoNormRegularizer


def _vote_member(predicted_class, weight):
    bias = [0.0, 0.0, 0.0]
    bias[predicted_class] = 1.0
    return {
        "name": "linear_classifier",
        "weight": weight,
        "config": {"input_size": 1, "n_classes": 3, "weights": [[0.0], [0.0], [0.0]], "bias": bias},
    }


# =============================================================================
# MEAN MODEL FACTORY TESTS
# =============================================================================

class TestCreateMeanModel:
    """Tests for create_mean_model."""

    def test_from_dict(self):
        ensemble = create_mean_model({
            "members": [
                {"name": "constant", "weight": 1.0, "config": {"value": 2.0}},
                {"name": "constant", "weight": 3.0, "config": {"value": 4.0}},
            ],
        })

        assert isinstance(ensemble, MeanModel)
        assert ensemble.number_of_models == 2
        np.testing.assert_allclose(ensemble.eval(np.zeros((1, 1))), [[3.5]])

    def test_voting_ensemble(self):
        ensemble = create_mean_model({
            "output_kind": "class_index",
            "output_size": 3,
            "members": [_vote_member(0, 2.0), _vote_member(1, 1.0)],
        })

        np.testing.assert_allclose(ensemble.eval(np.zeros((1, 1))), [[2 / 3, 1 / 3, 0.0]])

    def test_from_dataclass(self):
        config = EnsembleConfig(members=[MemberConfig("linear", 2.0, {"input_size": 3, "output_size": 2})])

        ensemble = create_mean_model(config)

        assert ensemble.weight_sum == 2.0
        assert ensemble.output_size == 2

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "ensemble.yaml"
        path.write_text(
            "parallel: true\n"
            "n_workers: 2\n"
            "members:\n"
            "  - name: constant\n"
            "    weight: 1.0\n"
            "    config: {value: 1.0}\n"
        )

        config = load_mean_model_config(config_file=path)

        assert config.parallel is True
        assert create_mean_model(config_file=path).number_of_models == 1

    def test_unknown_member_raises(self):
        with pytest.raises(ConfigValidationError):
            create_mean_model({"members": [{"name": "random_forest"}]})

    def test_bad_member_config_raises(self):
        with pytest.raises(InvalidArgumentError, match="Invalid config"):
            create_mean_model({"members": [{"name": "linear", "config": {"n_inputs": 2}}]})


# =============================================================================
# ERROR FUNCTION FACTORY TESTS
# =============================================================================

class TestCreateErrorFunction:
    """Tests for create_error_function."""

    def test_defaults(self, regression_data, linear_model):
        error = create_error_function(regression_data, linear_model)

        assert error.is_initialized is True
        assert isinstance(error.loss, SquaredLoss)
        assert error.regularizer is None
        assert np.isfinite(error.eval(error.propose_starting_point()))

    def test_overrides(self, regression_data, linear_model):
        error = create_error_function(
            regression_data,
            linear_model,
            {"use_mini_batches": True, "regularizer": "two_norm", "regularization_strength": 0.1},
        )

        assert isinstance(error.strategy, MiniBatchStrategy)
        assert isinstance(error.regularizer, TwoNormRegularizer)
        assert error.regularization_strength == 0.1

    def test_loss_by_name(self, classification_data):
        error = create_error_function(
            classification_data, LinearModel(input_size=2, output_size=3), {"loss": "cross_entropy"}
        )
        assert isinstance(error.loss, CrossEntropy)

    def test_without_initialize(self, regression_data, linear_model):
        error = create_error_function(
            regression_data, linear_model, ErrorFunctionConfig(), initialize=False
        )
        with pytest.raises(PreconditionError):
            error.eval(error.propose_starting_point())

    def test_seeded_mini_batches_are_reproducible(self, regression_data, linear_model):
        config = ErrorFunctionConfig(use_mini_batches=True, random_seed=11)
        point = np.array([0.1, 0.2, 0.3])

        first = create_error_function(regression_data, linear_model, config)
        second = create_error_function(regression_data, linear_model, config)

        assert [first.eval(point) for _ in range(5)] == [second.eval(point) for _ in range(5)]

    def test_invalid_loss_raises(self, regression_data, linear_model):
        with pytest.raises(ConfigValidationError):
            create_error_function(regression_data, linear_model, {"loss": "hinge"})

    def test_load_config(self):
        config = load_error_function_config({"random_seed": 7})
        assert config.random_seed == 7
        assert config.loss == "squared"
