"""
Tests for LinearModel, LinearClassifier and ConstantModel.

Tests cover:
- Evaluation and parameter vector layout
- Parameter derivatives against finite differences
- Input validation
"""
import numpy as np
import pytest

from learnkit.exceptions import InvalidArgumentError
from learnkit.models import ConstantModel, LinearClassifier, LinearModel, OutputKind
from learnkit.objectives import estimate_derivative


# =============================================================================
# LINEAR MODEL TESTS
# =============================================================================

class TestLinearModel:
    """Tests for the affine model."""

    def test_eval(self):
        model = LinearModel(input_size=2, output_size=1)
        model.set_parameter_vector(np.array([1.0, 2.0, 0.5]))

        np.testing.assert_allclose(model(np.array([[1.0, 1.0], [0.0, -1.0]])), [[3.5], [-1.5]])

    def test_parameter_layout(self):
        """Parameters are W in row-major order followed by b."""
        model = LinearModel(
            input_size=2, output_size=2, weights=[[1.0, 2.0], [3.0, 4.0]], bias=[5.0, 6.0]
        )

        np.testing.assert_array_equal(model.parameter_vector(), [1, 2, 3, 4, 5, 6])
        assert model.number_of_parameters == 6

    def test_without_offset(self):
        model = LinearModel(input_size=3, output_size=1, offset=False)

        assert model.number_of_parameters == 3
        assert model.has_offset is False
        with pytest.raises(InvalidArgumentError, match="without offset"):
            LinearModel(input_size=3, offset=False, bias=[1.0])

    def test_wrong_parameter_size_raises(self, linear_model):
        with pytest.raises(InvalidArgumentError, match="expects 3 parameters"):
            linear_model.set_parameter_vector(np.zeros(4))

    def test_wrong_input_shape_raises(self, linear_model):
        with pytest.raises(InvalidArgumentError, match="per-sample shape"):
            linear_model.eval(np.zeros((3, 5)))

    def test_weighted_parameter_derivative(self):
        """Derivative of sum(c * f(x)) matches finite differences."""
        np.random.seed(42)
        model = LinearModel(input_size=3, output_size=2)
        X = np.random.randn(6, 3)
        coefficients = np.random.randn(6, 2)
        point = np.random.randn(model.number_of_parameters)

        def weighted_output(parameters):
            model.set_parameter_vector(parameters)
            return float(np.sum(coefficients * model.eval(X)))

        expected = estimate_derivative(weighted_output, point)
        model.set_parameter_vector(point)
        outputs, state = model.eval_with_state(X)
        gradient = model.weighted_parameter_derivative(X, outputs, coefficients, state)

        np.testing.assert_allclose(gradient, expected, atol=1e-6)

    def test_properties(self, linear_model):
        assert linear_model.output_kind is OutputKind.CONTINUOUS
        assert linear_model.output_size == 1
        assert linear_model.has_first_parameter_derivative is True
        np.testing.assert_array_equal(linear_model.weights, [[0.3, -0.7]])


# =============================================================================
# LINEAR CLASSIFIER TESTS
# =============================================================================

class TestLinearClassifier:
    """Tests for the argmax classifier."""

    def test_predicts_argmax(self):
        classifier = LinearClassifier(
            input_size=2, n_classes=3, weights=[[1, 0], [0, 1], [-1, -1]], bias=[0, 0, 0]
        )

        predictions = classifier(np.array([[2.0, 1.0], [0.0, 3.0], [-2.0, -2.0]]))

        np.testing.assert_array_equal(predictions, [0, 1, 2])
        assert predictions.dtype == np.int64

    def test_properties(self):
        classifier = LinearClassifier(input_size=4, n_classes=5)

        assert classifier.output_kind is OutputKind.CLASS_INDEX
        assert classifier.output_size == 5
        assert classifier.number_of_parameters == 25
        assert classifier.has_first_parameter_derivative is False

    def test_has_no_derivative(self):
        classifier = LinearClassifier(input_size=2)
        with pytest.raises(NotImplementedError):
            classifier.weighted_parameter_derivative(np.zeros((1, 2)), np.zeros(1), np.zeros(1))

    def test_requires_two_classes(self):
        with pytest.raises(InvalidArgumentError, match="n_classes"):
            LinearClassifier(input_size=2, n_classes=1)


# =============================================================================
# CONSTANT MODEL TESTS
# =============================================================================

class TestConstantModel:
    """Tests for the constant model."""

    def test_outputs_value_for_every_sample(self):
        model = ConstantModel([1.0, -1.0])

        np.testing.assert_array_equal(model.eval(np.zeros((3, 7))), [[1, -1]] * 3)

    def test_parameters_are_value(self):
        model = ConstantModel(2.0)
        model.set_parameter_vector(np.array([5.0]))

        np.testing.assert_array_equal(model.eval(np.zeros((1, 1))), [[5.0]])

    def test_derivative_sums_coefficients(self):
        model = ConstantModel([0.0, 0.0])
        coefficients = np.array([[1.0, 2.0], [3.0, 4.0]])

        gradient = model.weighted_parameter_derivative(np.zeros((2, 1)), None, coefficients)

        np.testing.assert_array_equal(gradient, [4.0, 6.0])

    def test_declared_input_size(self):
        model = ConstantModel(1.0, input_size=3)
        assert model.input_shape == (3,)
        with pytest.raises(InvalidArgumentError):
            model.eval(np.zeros((2, 2)))

    def test_empty_value_raises(self):
        with pytest.raises(InvalidArgumentError):
            ConstantModel([])
