"""Sample datasets bundled with the modeling library.

Names listed here resolve through statsmodels and never touch the
cache directory or the network.
"""

from __future__ import annotations

import importlib
import pkgutil
from typing import Protocol

import pyarrow as pa
import statsmodels.datasets as sm_datasets

_NON_DATASET_MODULES = frozenset({"tests", "utils"})


class BundledCatalog(Protocol):
    """Source of datasets shipped with a modeling library."""

    def names(self) -> tuple[str, ...]:
        """Return the bundled dataset names."""

    def load(self, name: str) -> pa.Table:
        """Load one bundled dataset as an Arrow table."""


class StatsmodelsCatalog:
    """Bundled catalog backed by ``statsmodels.datasets``."""

    def __init__(self) -> None:
        self._names: tuple[str, ...] | None = None

    def names(self) -> tuple[str, ...]:
        if self._names is None:
            self._names = tuple(
                sorted(
                    module.name
                    for module in pkgutil.iter_modules(sm_datasets.__path__)
                    if module.ispkg and module.name not in _NON_DATASET_MODULES
                )
            )
        return self._names

    def load(self, name: str) -> pa.Table:
        module = importlib.import_module(f"{sm_datasets.__name__}.{name}")
        frame = module.load_pandas().data
        return pa.Table.from_pandas(frame, preserve_index=False)
