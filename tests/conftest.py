from __future__ import annotations

from pathlib import Path

import pytest

from voice_expense.shared.currency_catalog import default_catalog

_GROUP_MARKERS = {
    "unit": pytest.mark.unit,
    "parser": pytest.mark.unit,
    "integration": pytest.mark.integration,
}


def _tests_group(path: Path) -> str | None:
    parts = path.parts
    if "tests" not in parts:
        return None
    idx = parts.index("tests")
    return parts[idx + 1] if idx + 1 < len(parts) else None


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    for item in items:
        marker = _GROUP_MARKERS.get(_tests_group(Path(str(item.fspath))))
        if marker is not None:
            item.add_marker(marker)


@pytest.fixture(scope="session")
def catalog():
    return default_catalog()
