"""
Mean Model - Weighted ensemble of sub-models.

Combines the outputs of a list of sub-models into a single weighted output:

    output = sum_i weight[i] * contribution(model[i], inputs) / sum_i weight[i]

Two aggregation modes, fixed when the ensemble is constructed:
    - CONTINUOUS members: weighted arithmetic mean of the member outputs
    - CLASS_INDEX members: each member adds its weight to the cell
      (sample, predicted_class), giving a normalized weighted vote
      distribution over output_size classes

Parallel Mode:
    Enable parallel=True to evaluate members concurrently on a thread pool.
    Member outputs are always accumulated serially in member order, so the
    result is identical to sequential evaluation.
"""
from __future__ import annotations

import copy
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import joblib
import numpy as np

from ..exceptions import (
    InvalidArgumentError,
    ModelTypeError,
    OutOfRangeError,
    PreconditionError,
)
from .base import AbstractModel, OutputKind, as_batch
from .registry import register

logger = logging.getLogger(__name__)

# Default thread pool size for parallel member evaluation
_DEFAULT_PARALLEL_WORKERS = 4

STATE_FILENAME = "mean_model.joblib"


@register(
    name="mean",
    family="ensemble",
    description="Weighted mean (regression) or weighted vote (classification) of sub-models",
    aliases=["mean_model"],
)
class MeanModel(AbstractModel):
    """
    Weighted mean of a set of models.

    The ensemble owns independent copies of its members: add_model() stores
    a deep copy, so later changes to the caller's model do not leak in.

    Example:
        # Regression ensemble
        ensemble = MeanModel()
        ensemble.add_model(ConstantModel(2.0), weight=1.0)
        ensemble.add_model(ConstantModel(4.0), weight=3.0)
        ensemble(np.zeros((1, 1)))  # [[3.5]]

        # Voting ensemble over 3 classes
        ensemble = MeanModel(output_kind="class_index", output_size=3)
        ensemble.add_model(classifier_a, weight=2.0)
        ensemble.add_model(classifier_b, weight=1.0)
    """

    def __init__(
        self,
        output_kind: Union[OutputKind, str] = OutputKind.CONTINUOUS,
        output_size: Optional[int] = None,
        parallel: bool = False,
        n_workers: int = _DEFAULT_PARALLEL_WORKERS,
    ) -> None:
        if output_size is not None and output_size < 0:
            raise InvalidArgumentError(f"output_size must be >= 0, got {output_size}")
        if n_workers <= 0:
            raise InvalidArgumentError(f"n_workers must be positive, got {n_workers}")

        self._models: List[AbstractModel] = []
        self._weights: List[float] = []
        self._weight_sum = 0.0
        self._output_size = output_size
        self._output_size_inferred = False
        self._parallel = bool(parallel)
        self._n_workers = int(n_workers)
        self._set_member_kind(OutputKind(output_kind))

    def _set_member_kind(self, kind: OutputKind) -> None:
        self._member_kind = kind
        if kind is OutputKind.CONTINUOUS:
            self._accumulate: Callable[[np.ndarray, List[np.ndarray]], None] = self._accumulate_mean
        else:
            self._accumulate = self._accumulate_votes

    # =========================================================================
    # MODEL INTERFACE
    # =========================================================================

    @property
    def name(self) -> str:
        return "MeanModel"

    @property
    def output_kind(self) -> OutputKind:
        # The ensemble always produces real-valued rows.
        return OutputKind.CONTINUOUS

    @property
    def member_output_kind(self) -> OutputKind:
        """Output kind shared by all members."""
        return self._member_kind

    @property
    def input_shape(self) -> Tuple[int, ...]:
        return self._models[0].input_shape if self._models else ()

    @property
    def output_shape(self) -> Tuple[int, ...]:
        return self._models[0].output_shape if self._models else ()

    @property
    def output_size(self) -> int:
        return self._output_size or 0

    def set_output_size(self, dim: int) -> None:
        """Set the output dimensionality (number of classes for voting)."""
        if dim < 0:
            raise InvalidArgumentError(f"output_size must be >= 0, got {dim}")
        self._output_size = int(dim)
        self._output_size_inferred = False

    @property
    def number_of_parameters(self) -> int:
        return 0

    def parameter_vector(self) -> np.ndarray:
        """This model does not have any parameters."""
        return np.zeros(0)

    def set_parameter_vector(self, parameters: np.ndarray) -> None:
        """Accepts only an empty vector; this model has no parameters."""
        parameters = np.asarray(parameters)
        if parameters.size != 0:
            raise InvalidArgumentError(
                f"MeanModel has no parameters, got a vector of size {parameters.size}"
            )

    # =========================================================================
    # ENSEMBLE MANAGEMENT
    # =========================================================================

    def add_model(self, model: AbstractModel, weight: float = 1.0) -> None:
        """
        Add a copy of a model to the ensemble.

        Args:
            model: The new member
            weight: Weight of the member, must be > 0

        Raises:
            InvalidArgumentError: If weight <= 0
            ModelTypeError: If the member's output kind, input shape or (for
                continuous members) output size does not match the ensemble
        """
        self._check_weight(weight)
        if model.output_kind is not self._member_kind:
            raise ModelTypeError(
                f"MeanModel expects members with {self._member_kind.value} output, "
                f"got {model.name} with {model.output_kind.value} output"
            )
        if self._models and model.input_shape != self._models[0].input_shape:
            raise ModelTypeError(
                f"Member input shape {model.input_shape} does not match "
                f"ensemble input shape {self._models[0].input_shape}"
            )
        if (
            self._member_kind is OutputKind.CONTINUOUS
            and self._output_size is not None
            and model.output_size != self._output_size
        ):
            raise ModelTypeError(
                f"Member output size {model.output_size} does not match "
                f"ensemble output size {self._output_size}"
            )

        self._models.append(copy.deepcopy(model))
        self._weights.append(float(weight))
        self._weight_sum += float(weight)

        if self._output_size is None and self._member_kind is OutputKind.CONTINUOUS:
            self._output_size = model.output_size
            self._output_size_inferred = True

        logger.debug(
            f"Added {model.name} to MeanModel with weight={weight} "
            f"({len(self._models)} models, weight_sum={self._weight_sum})"
        )

    def clear_models(self) -> None:
        """Remove all models from the ensemble. An inferred output_size is forgotten."""
        self._models.clear()
        self._weights.clear()
        self._weight_sum = 0.0
        if self._output_size_inferred:
            self._output_size = None
            self._output_size_inferred = False

    def get_model(self, index: int) -> AbstractModel:
        """Return the index-th member (the ensemble's own copy)."""
        return self._models[index]

    def weight(self, index: int) -> float:
        """Return the weight of the index-th member."""
        return self._weights[index]

    def set_weight(self, index: int, new_weight: float) -> None:
        """
        Set the weight of the index-th member.

        Raises:
            InvalidArgumentError: If new_weight <= 0
        """
        self._check_weight(new_weight)
        old_weight = self._weights[index]
        self._weight_sum += float(new_weight) - old_weight
        self._weights[index] = float(new_weight)

    @property
    def weights(self) -> np.ndarray:
        """Copy of all member weights."""
        return np.array(self._weights, dtype=np.float64)

    @property
    def weight_sum(self) -> float:
        """Total of all member weights."""
        return self._weight_sum

    @property
    def number_of_models(self) -> int:
        return len(self._models)

    @staticmethod
    def _check_weight(weight: float) -> None:
        if not weight > 0:
            raise InvalidArgumentError(f"Weights must be positive, got {weight}")

    # =========================================================================
    # EVALUATION
    # =========================================================================

    def eval(self, inputs: np.ndarray) -> np.ndarray:
        """
        Evaluate the ensemble on a batch.

        Returns:
            Array of shape (n_samples, output_size)

        Raises:
            PreconditionError: If the ensemble is empty
            OutOfRangeError: If a member predicts a class >= output_size
        """
        if not self._models:
            raise PreconditionError("MeanModel has no models. Call add_model() first.")

        inputs = np.asarray(inputs)
        if self._parallel and len(self._models) > 1:
            member_outputs, inference_ms = self._collect_outputs_parallel(inputs)
        else:
            member_outputs, inference_ms = self._collect_outputs_sequential(inputs)

        outputs = np.zeros((len(inputs), self.output_size))
        self._accumulate(outputs, member_outputs)
        outputs /= self._weight_sum

        logger.debug(
            f"MeanModel evaluated {len(self._models)} models on {len(inputs)} samples "
            f"in {inference_ms:.2f}ms"
        )
        return outputs

    def _accumulate_mean(self, outputs: np.ndarray, member_outputs: List[np.ndarray]) -> None:
        """Add weight[i] * output[i] for real-valued members."""
        for weight, member_output in zip(self._weights, member_outputs):
            member_output = as_batch(member_output)
            if member_output.shape != outputs.shape:
                raise InvalidArgumentError(
                    f"Member output shape {member_output.shape} does not match "
                    f"ensemble output shape {outputs.shape}"
                )
            outputs += weight * member_output

    def _accumulate_votes(self, outputs: np.ndarray, member_outputs: List[np.ndarray]) -> None:
        """Add weight[i] to the predicted class cell of every sample."""
        n_samples, n_classes = outputs.shape
        rows = np.arange(n_samples)
        for weight, responses in zip(self._weights, member_outputs):
            responses = np.asarray(responses).ravel()
            if len(responses) != n_samples:
                raise InvalidArgumentError(
                    f"Member returned {len(responses)} predictions for {n_samples} samples"
                )
            if not np.issubdtype(responses.dtype, np.integer):
                if not np.all(np.equal(np.mod(responses, 1), 0)):
                    raise InvalidArgumentError("Member class predictions must be integers")
            invalid = (responses < 0) | (responses >= n_classes)
            if np.any(invalid):
                raise OutOfRangeError(
                    f"Predicted class {int(responses[invalid][0])} is out of range "
                    f"for output_size={n_classes}"
                )
            np.add.at(outputs, (rows, responses.astype(np.int64)), weight)

    def _collect_outputs_parallel(
        self, inputs: np.ndarray
    ) -> Tuple[List[np.ndarray], float]:
        """
        Evaluate all members on a thread pool.

        Returns:
            Tuple of (member outputs in member order, inference_time_ms)
        """
        n_workers = min(self._n_workers, len(self._models))

        start = time.perf_counter()
        outputs: List[Optional[np.ndarray]] = [None] * len(self._models)

        def eval_model(idx: int) -> Tuple[int, np.ndarray]:
            return idx, self._models[idx].eval(inputs)

        with ThreadPoolExecutor(max_workers=n_workers) as executor:
            futures = {
                executor.submit(eval_model, i): i
                for i in range(len(self._models))
            }
            for future in as_completed(futures):
                idx, output = future.result()
                outputs[idx] = output

        elapsed_ms = (time.perf_counter() - start) * 1000
        return outputs, elapsed_ms

    def _collect_outputs_sequential(
        self, inputs: np.ndarray
    ) -> Tuple[List[np.ndarray], float]:
        """Evaluate all members one after another."""
        start = time.perf_counter()
        outputs = [model.eval(inputs) for model in self._models]
        elapsed_ms = (time.perf_counter() - start) * 1000
        return outputs, elapsed_ms

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def get_state(self) -> Dict[str, Any]:
        """
        Return the full ensemble state.

        Field order: models, weights, weight_sum, output_size, output_kind.
        """
        return {
            "models": [copy.deepcopy(m) for m in self._models],
            "weights": list(self._weights),
            "weight_sum": self._weight_sum,
            "output_size": self._output_size,
            "output_kind": self._member_kind.value,
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        """
        Restore a state produced by get_state().

        Raises:
            InvalidArgumentError: If the state is inconsistent
        """
        models = list(state["models"])
        weights = [float(w) for w in state["weights"]]
        weight_sum = float(state["weight_sum"])

        if len(models) != len(weights):
            raise InvalidArgumentError(
                f"State has {len(models)} models but {len(weights)} weights"
            )
        for w in weights:
            self._check_weight(w)
        if not np.isclose(weight_sum, sum(weights)):
            raise InvalidArgumentError(
                f"State weight_sum={weight_sum} does not match sum of weights={sum(weights)}"
            )

        self._models = models
        self._weights = weights
        self._weight_sum = weight_sum
        self._output_size = state["output_size"]
        self._output_size_inferred = False
        self._set_member_kind(OutputKind(state.get("output_kind", self._member_kind.value)))

    def save(self, path: Path) -> Path:
        """
        Save the ensemble state to a directory.

        Returns:
            Path to the written state file
        """
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        state_path = path / STATE_FILENAME
        joblib.dump(self.get_state(), state_path)
        logger.info(f"Saved MeanModel with {len(self._models)} models to {path}")
        return state_path

    def load(self, path: Path) -> None:
        """
        Load ensemble state saved by save().

        Raises:
            FileNotFoundError: If no state file exists at path
        """
        path = Path(path)
        state_path = path / STATE_FILENAME
        if not state_path.exists():
            raise FileNotFoundError(f"MeanModel state not found: {state_path}")

        self.set_state(joblib.load(state_path))
        logger.info(f"Loaded MeanModel with {len(self._models)} models from {path}")

    def __repr__(self) -> str:
        return (
            f"MeanModel(member_output_kind={self._member_kind.value}, "
            f"n_models={len(self._models)}, "
            f"output_size={self.output_size}, "
            f"weight_sum={self._weight_sum})"
        )


__all__ = ["MeanModel"]
