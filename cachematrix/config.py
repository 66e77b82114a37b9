"""Validated solver configuration compatible with Hydra and plain mappings."""

import numbers
import os
from typing import Any, Dict, List, Mapping, Optional, Union

from omegaconf import DictConfig, OmegaConf

from cachematrix.matrix import DEFAULT_RCOND_TOLERANCE, INVERSION_METHODS


class SolverConfig:
    """Settings shared by :class:`~cachematrix.cell.CacheCell` and the solver."""

    FIELD_META: Dict[str, Dict[str, Any]] = {
        "method": {
            "type": "str",
            "default": "inv",
            "choices": set(INVERSION_METHODS),
            "normalize": "lower",
        },
        "rcond_tolerance": {"type": "float", "min": 0.0, "default": DEFAULT_RCOND_TOLERANCE},
        "validate_on_set": {"type": "bool", "default": True},
        "log_cache_hits": {"type": "bool", "default": True},
    }

    ENV_VARS: Dict[str, str] = {
        "method": "CACHEMATRIX_METHOD",
        "rcond_tolerance": "CACHEMATRIX_RCOND_TOLERANCE",
        "validate_on_set": "CACHEMATRIX_VALIDATE_ON_SET",
        "log_cache_hits": "CACHEMATRIX_LOG_CACHE_HITS",
    }

    TYPE_LABELS = {
        "float": "a float",
        "bool": "a boolean",
        "str": "a string",
    }

    def __init__(self, **kwargs: Any):
        unknown = set(kwargs) - set(self.FIELD_META)
        if unknown:
            raise KeyError(
                "Unknown solver configuration parameters: " + ", ".join(sorted(unknown))
            )
        normalized = self._normalized_values(kwargs)
        for key, value in normalized.items():
            setattr(self, key, value)

    @classmethod
    def from_omegaconf(
        cls, config: Optional[Union[DictConfig, Mapping[str, Any]]]
    ) -> "SolverConfig":
        """Create an instance from a DictConfig or a standard mapping."""
        if config is None:
            return cls()
        if isinstance(config, DictConfig):
            config = OmegaConf.to_container(config, resolve=True)
        if not isinstance(config, Mapping):
            raise TypeError(
                "Solver configuration must be a mapping or DictConfig-compatible object."
            )
        return cls(**config)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SolverConfig":
        """Build a configuration from ``CACHEMATRIX_*`` environment variables."""
        environ = os.environ if environ is None else environ
        overrides = {
            name: environ[var]
            for name, var in cls.ENV_VARS.items()
            if environ.get(var, "").strip() != ""
        }
        return cls(**overrides)

    def as_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELD_META}

    def apply_overrides(self, **overrides: Any) -> None:
        """Apply validated overrides on top of the current instance."""
        unknown = set(overrides) - set(self.FIELD_META)
        if unknown:
            raise KeyError(
                "Unknown solver configuration parameters: " + ", ".join(sorted(unknown))
            )
        merged = self.as_dict()
        merged.update(overrides)
        normalized = self._normalized_values(merged)
        for key, value in normalized.items():
            setattr(self, key, value)

    @classmethod
    def _normalized_values(cls, overrides: Mapping[str, Any]) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        errors: List[str] = []

        for name, meta in cls.FIELD_META.items():
            raw_value = overrides.get(name, meta["default"])

            try:
                value = cls._cast_value(name, raw_value, meta)
            except TypeError as exc:
                errors.append(str(exc))
                continue

            try:
                cls._validate_constraints(name, value, meta)
            except ValueError as exc:
                errors.append(str(exc))
                continue

            data[name] = value

        if errors:
            raise ValueError("Invalid solver configuration: " + "; ".join(errors))

        return data

    @classmethod
    def _cast_value(cls, name: str, value: Any, meta: Dict[str, Any]) -> Any:
        if value is None:
            raise TypeError(f"Parameter '{name}' cannot be null.")

        type_name = meta["type"]
        caster = getattr(cls, f"_cast_{type_name}")
        try:
            return caster(value, meta)
        except (TypeError, ValueError) as exc:
            label = cls.TYPE_LABELS[type_name]
            raise TypeError(
                f"Parameter '{name}' must be {label} "
                f"(received {value!r} of type {type(value).__name__})."
            ) from exc

    @staticmethod
    def _cast_float(value: Any, meta: Dict[str, Any]) -> float:
        # bool is a numbers.Real subclass.
        if isinstance(value, bool) or not isinstance(value, (numbers.Real, str)):
            raise TypeError(value)
        return float(value.strip() if isinstance(value, str) else value)

    @staticmethod
    def _cast_bool(value: Any, meta: Dict[str, Any]) -> bool:
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if isinstance(value, (str, numbers.Integral)):
            if normalized in {"true", "yes", "1", "on"}:
                return True
            if normalized in {"false", "no", "0", "off"}:
                return False
        raise ValueError(value)

    @staticmethod
    def _cast_str(value: Any, meta: Dict[str, Any]) -> str:
        if not isinstance(value, str):
            raise TypeError(value)
        text = value.strip()
        if meta.get("normalize") == "lower":
            text = text.lower()
        return text

    @staticmethod
    def _validate_constraints(name: str, value: Any, meta: Dict[str, Any]) -> None:
        choices = meta.get("choices")
        if choices and value not in choices:
            allowed = ", ".join(sorted(choices))
            raise ValueError(
                f"Parameter '{name}' must be one of: {allowed} (received {value!r})."
            )

        min_value = meta.get("min")
        if min_value is not None and value < min_value:
            raise ValueError(
                f"Parameter '{name}' must be greater than or equal to {min_value} (received {value})."
            )

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.as_dict().items())
        return f"SolverConfig({fields})"
