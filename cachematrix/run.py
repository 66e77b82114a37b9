"""Entry point that wires Hydra configuration and solves a matrix file with the cache."""

import json
import logging
import sys
from pathlib import Path

# Ensure the project root is on the import path when executed as a script.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import hydra
import numpy as np
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf
from pydantic import ValidationError

from cachematrix.cell import CacheCell
from cachematrix.config import SolverConfig
from cachematrix.exceptions import InvalidInputError, NotInvertibleError
from cachematrix.matrix import as_matrix
from cachematrix.models import MatrixFile
from cachematrix.solver import solve_with_cache

logger = logging.getLogger(__name__)


def load_matrix_file(filepath: str) -> np.ndarray:
    """Read a JSON matrix, either a bare list of rows or ``{"rows": [...]}``."""
    with open(filepath, "r", encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, list):
        data = {"rows": data}
    try:
        payload = MatrixFile.model_validate(data)
    except ValidationError as exc:
        raise InvalidInputError(f"Invalid matrix file '{filepath}': {exc}") from exc
    return as_matrix(payload.rows)


def solve_repeatedly(cell: CacheCell, repeat: int, config: SolverConfig) -> np.ndarray:
    """Solve ``cell`` ``repeat`` times, printing each result and where it came from."""
    inverse = None
    for attempt in range(1, repeat + 1):
        hits = []
        inverse = solve_with_cache(cell, config=config, on_cache_hit=hits.append)
        source = "cache" if hits else "computed"
        print(f"\n🔁 Solve #{attempt} ({source}):")
        print(inverse)
    return inverse


@hydra.main(config_path="../configs", config_name="config", version_base=None)
def main(cfg: DictConfig) -> None:
    """Hydra-driven execution entry point for cachematrix."""
    print("\n" + "=" * 70)
    print("🧮 CACHEMATRIX – MEMOIZED MATRIX INVERSION")
    print("=" * 70)
    print("\n📊 Configuration:")
    print(OmegaConf.to_yaml(cfg))

    try:
        solver_config = SolverConfig.from_omegaconf(cfg.solver)
    except (KeyError, TypeError, ValueError) as exc:
        print(f"❌ Error: {exc}")
        sys.exit(1)

    matrix_path = to_absolute_path(cfg.matrix_file)
    try:
        matrix = load_matrix_file(matrix_path)
        cell = CacheCell(matrix, validate_on_set=solver_config.validate_on_set)
    except FileNotFoundError:
        print(f"❌ Error: file not found: '{matrix_path}'")
        sys.exit(1)
    except (json.JSONDecodeError, InvalidInputError) as exc:
        print(f"❌ Error while reading matrix: {exc}")
        sys.exit(1)

    print("\n🎯 Matrix:")
    print(cell.get())

    repeat = max(int(cfg.repeat), 1)
    try:
        inverse = solve_repeatedly(cell, repeat, solver_config)
    except NotInvertibleError as exc:
        print(f"\n❌ {exc}")
        sys.exit(2)

    print("\n✅ Verification (A · A⁻¹ = I):")
    print(cell.get() @ inverse)

    stats = cell.stats
    logger.info(
        "Cache stats: hits=%d misses=%d failures=%d hit_rate=%.2f",
        stats.hits,
        stats.misses,
        stats.failures,
        stats.hit_rate,
    )


if __name__ == "__main__":
    main()
