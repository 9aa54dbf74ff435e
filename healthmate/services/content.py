"""
Read-only content stores backing the catalog, home screen and report endpoints.

Every store is loaded once from the YAML files under ``healthmate/data`` and
never mutated afterwards. Reads hand out deep copies so a route can decorate
a record without touching the shared data.
"""

from __future__ import annotations

import copy
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from ..config import DATA_DIR


def load_yaml(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Content file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


class CatalogStore:
    def __init__(self, products: Mapping[str, dict], recommendations: list[dict]) -> None:
        self._products = MappingProxyType({str(key): value for key, value in products.items()})
        self._recommendations = tuple(recommendations)

    @classmethod
    def from_file(cls, path: Path) -> "CatalogStore":
        data = load_yaml(path)
        return cls(data.get("products") or {}, data.get("recommendations") or [])

    def get_product(self, product_id: Any) -> dict | None:
        product = self._products.get(str(product_id))
        return copy.deepcopy(product) if product is not None else None

    def list_recommendations(self) -> list[dict]:
        return [copy.deepcopy(item) for item in self._recommendations]


class ReportStore:
    """Canned western-medicine and TCM health reports.

    ``criteria`` is accepted for interface parity with a real report service
    but does not influence the returned record.
    """

    def __init__(self, western: dict, tcm: dict) -> None:
        self._western = MappingProxyType(western)
        self._tcm = MappingProxyType(tcm)

    @classmethod
    def from_dir(cls, directory: Path) -> "ReportStore":
        return cls(load_yaml(directory / "western.yaml"), load_yaml(directory / "tcm.yaml"))

    def get_western_report(self, criteria: Any = None) -> dict:
        return copy.deepcopy(dict(self._western))

    def get_tcm_report(self, criteria: Any = None) -> dict:
        return copy.deepcopy(dict(self._tcm))


class HomeStore:
    def __init__(self, data: dict) -> None:
        self._data = MappingProxyType(data)

    @classmethod
    def from_file(cls, path: Path) -> "HomeStore":
        return cls(load_yaml(path))

    def _get(self, key: str, default: Any) -> Any:
        return copy.deepcopy(self._data.get(key, default))

    def get_welcome(self) -> dict:
        return self._get("welcome", {})

    def list_devices(self) -> list[dict]:
        return self._get("devices", [])

    def get_health_status(self) -> dict:
        return self._get("health_status", {})

    def list_news(self) -> list[dict]:
        return self._get("news", [])


# Loaded once at import; shared read-only by every request.
catalog_store = CatalogStore.from_file(DATA_DIR / "catalog.yaml")
report_store = ReportStore.from_dir(DATA_DIR / "reports")
home_store = HomeStore.from_file(DATA_DIR / "home.yaml")

__all__ = [
    "CatalogStore",
    "HomeStore",
    "ReportStore",
    "catalog_store",
    "home_store",
    "load_yaml",
    "report_store",
]
