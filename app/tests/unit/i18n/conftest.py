"""Feature-level fixtures for i18n runtime tests.

Provides catalog data, sources and controllers for resolution, loading and
lookup scenarios.
"""

import json

import pytest
import yaml

from tests.factories.i18n import (
    ControlledSource,
    make_catalogs,
    make_controller,
    make_static_source,
)


@pytest.fixture
def catalogs():
    return make_catalogs()


@pytest.fixture
def static_source(catalogs):
    return make_static_source(catalogs)


@pytest.fixture
def controlled_source(catalogs):
    return ControlledSource(catalogs)


@pytest.fixture
def controller(controlled_source):
    """Uninitialized controller over a controllable source."""
    return make_controller(controlled_source)


@pytest.fixture
def translations_dir(tmp_path):
    """Directory of generated catalog files.

    Contains:
    - en.json (flat)
    - de.yml (nested sections)
    - de-AT.json (flat regional overrides)
    """
    (tmp_path / "en.json").write_text(
        json.dumps({"common.save": "Save", "common.cancel": "Cancel"}),
        encoding="utf-8",
    )
    with open(tmp_path / "de.yml", "w", encoding="utf-8") as f:
        yaml.dump({"common": {"save": "Speichern", "cancel": "Abbrechen"}}, f)
    (tmp_path / "de-AT.json").write_text(
        json.dumps({"common.cancel": "Abbruch"}),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def worker_payload():
    """Successful payload of the translation data worker."""
    return {
        "success": True,
        "data": {
            "keys": [
                {"id": 1, "key": "common.save", "category": "common"},
                {"id": 2, "key": "common.cancel", "category": "common"},
            ],
            "languages": [
                {"id": 1, "code": "en", "name": "English", "is_active": True},
                {"id": 2, "code": "nl", "name": "Dutch", "is_active": True},
                {"id": 3, "code": "nl-BE", "name": "Flemish", "is_active": True},
            ],
            "translations": {
                "en": {"common.save": "Save", "common.cancel": "Cancel"},
                "nl": {"common.save": "Opslaan", "common.cancel": "Annuleren"},
                "nl-BE": {"common.save": "Bewaren"},
            },
        },
        "metadata": {"timestamp": "2024-01-01T00:00:00Z", "totalLanguages": 3, "totalKeys": 2},
    }
