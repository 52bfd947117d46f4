"""
ModelRegistry - Name-based lookup for model classes.

The registry lets configuration files refer to models by name:
- Register model classes with the @register decorator
- Create models by name from a keyword config
- List available models by family

Example:
    >>> @register("linear", family="linear")
    ... class LinearModel(AbstractModel):
    ...     pass
    ...
    >>> model = ModelRegistry.create("linear", config={"input_size": 4, "output_size": 1})
    >>> ModelRegistry.list_models()
    {'linear': ['linear', 'linear_classifier'], 'constant': ['constant']}
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..exceptions import InvalidArgumentError
from .base import AbstractModel

logger = logging.getLogger(__name__)


class ModelRegistry:
    """
    Registry of model classes.

    Class Attributes:
        _models: Dict mapping model names (and aliases) to model classes
        _families: Dict mapping family names to lists of model names
        _metadata: Dict mapping canonical model names to metadata dicts
    """

    _models: dict[str, type[AbstractModel]] = {}
    _families: dict[str, list[str]] = {}
    _metadata: dict[str, dict[str, Any]] = {}

    @classmethod
    def register(
        cls,
        name: str,
        family: str,
        description: str = "",
        aliases: list[str] | None = None,
    ) -> Callable[[type[AbstractModel]], type[AbstractModel]]:
        """
        Decorator to register a model class.

        Args:
            name: Unique model identifier (e.g., "linear", "constant")
            family: Model family (e.g., "linear", "ensemble")
            description: Human-readable description
            aliases: Alternative names for the model

        Returns:
            Decorator function that registers the model class

        Raises:
            TypeError: If the class is not an AbstractModel
            ValueError: If model name is already registered
        """
        aliases = aliases or []

        def decorator(model_class: type[AbstractModel]) -> type[AbstractModel]:
            if not issubclass(model_class, AbstractModel):
                raise TypeError(
                    f"Model class must be a subclass of AbstractModel, "
                    f"got {model_class.__name__}"
                )

            if name in cls._models:
                raise ValueError(
                    f"Model '{name}' is already registered to "
                    f"{cls._models[name].__name__}"
                )

            cls._models[name] = model_class

            for alias in aliases:
                if alias in cls._models:
                    logger.warning(f"Alias '{alias}' already registered, skipping")
                else:
                    cls._models[alias] = model_class

            cls._families.setdefault(family, []).append(name)

            cls._metadata[name] = {
                "name": name,
                "family": family,
                "description": description,
                "aliases": aliases,
                "class": model_class.__name__,
            }

            logger.debug(
                f"Registered model '{name}' ({model_class.__name__}) "
                f"in family '{family}'"
            )
            return model_class

        return decorator

    @classmethod
    def create(
        cls,
        name: str,
        config: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> AbstractModel:
        """
        Instantiate a registered model.

        Args:
            name: Model name or alias
            config: Constructor keyword arguments
            **kwargs: Additional constructor arguments (override config)

        Returns:
            Instantiated model

        Raises:
            InvalidArgumentError: If the name is unknown or the config does
                not match the constructor
        """
        model_class = cls.get(name)
        arguments = dict(config or {})
        arguments.update(kwargs)
        try:
            return model_class(**arguments)
        except TypeError as e:
            raise InvalidArgumentError(
                f"Invalid config for model '{name}': {e}"
            ) from e

    @classmethod
    def get(cls, name: str) -> type[AbstractModel]:
        """
        Get a model class by name.

        Raises:
            InvalidArgumentError: If model name is not registered
        """
        name_lower = name.lower().strip()

        if name_lower not in cls._models:
            available = sorted(cls._models.keys())
            raise InvalidArgumentError(
                f"Unknown model '{name}'. Available models: {available}"
            )

        return cls._models[name_lower]

    @classmethod
    def list_models(cls) -> dict[str, list[str]]:
        """List all registered models by family."""
        return {family: list(models) for family, models in cls._families.items()}

    @classmethod
    def list_all(cls) -> list[str]:
        """Sorted list of canonical model names (aliases excluded)."""
        return sorted(cls._metadata.keys())

    @classmethod
    def list_family(cls, family: str) -> list[str]:
        """
        List all models in a specific family.

        Raises:
            InvalidArgumentError: If family is not found
        """
        family_lower = family.lower().strip()

        if family_lower not in cls._families:
            available = sorted(cls._families.keys())
            raise InvalidArgumentError(
                f"Unknown family '{family}'. Available families: {available}"
            )

        return list(cls._families[family_lower])

    @classmethod
    def get_metadata(cls, name: str) -> dict[str, Any]:
        """
        Get metadata for a registered model (aliases resolve to the canonical entry).

        Raises:
            InvalidArgumentError: If model name is not registered
        """
        model_class = cls.get(name)
        for meta in cls._metadata.values():
            if meta["class"] == model_class.__name__:
                return meta.copy()

        return {
            "name": name.lower().strip(),
            "family": "unknown",
            "description": "",
            "aliases": [],
            "class": model_class.__name__,
        }

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a model name or alias is registered."""
        return name.lower().strip() in cls._models

    @classmethod
    def clear(cls) -> None:
        """Clear all registered models. Primarily used for testing."""
        cls._models.clear()
        cls._families.clear()
        cls._metadata.clear()
        logger.debug("Cleared all registered models")

    @classmethod
    def families(cls) -> list[str]:
        """Sorted list of family names."""
        return sorted(cls._families.keys())

    @classmethod
    def count(cls) -> int:
        """Number of registered models (excluding aliases)."""
        return len(cls._metadata)


def register(
    name: str,
    family: str,
    description: str = "",
    aliases: list[str] | None = None,
) -> Callable[[type[AbstractModel]], type[AbstractModel]]:
    """
    Convenience decorator for model registration.

    Equivalent to ModelRegistry.register().
    """
    return ModelRegistry.register(
        name=name,
        family=family,
        description=description,
        aliases=aliases,
    )


__all__ = [
    "ModelRegistry",
    "register",
]
