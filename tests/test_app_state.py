from __future__ import annotations

import os
from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required", exc_type=ImportError)

from PIL import Image
from PySide6.QtCore import QCoreApplication

from instafilter.app_state import (
    LOAD_FAILED_TITLE,
    NO_IMAGE_MESSAGE,
    NO_IMAGE_TITLE,
    AppState,
)
from instafilter.config import Settings
from instafilter.core.catalog import FilterVariant, ParameterName
from instafilter.core.engine import EngineState


@pytest.fixture(scope="module")
def qapp() -> QCoreApplication:
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


class _ImmediatePool:
    def __init__(self) -> None:
        self.started = []

    def start(self, worker) -> None:
        self.started.append(worker)
        worker.run()


@pytest.fixture
def pool() -> _ImmediatePool:
    return _ImmediatePool()


@pytest.fixture
def state(qapp, tmp_path: Path, pool: _ImmediatePool) -> AppState:
    settings = Settings(tmp_path / "settings.json", {"export": {"directory": str(tmp_path / "exports")}})
    app_state = AppState.from_settings(settings, pool=pool)
    yield app_state
    app_state.shutdown()


def test_from_settings_applies_defaults(qapp, tmp_path: Path, pool: _ImmediatePool) -> None:
    settings = Settings(None, {"filter": {"default": "edges", "intensity": 0.2}})
    app_state = AppState.from_settings(settings, pool=pool)

    assert app_state.engine.variant is FilterVariant.EDGES
    assert app_state.engine.intensity == 0.2
    assert app_state.filter_label == "Change Filter"
    app_state.shutdown()


def test_save_without_image_shows_notice(state: AppState, pool: _ImmediatePool) -> None:
    notices: list[tuple[str, str]] = []
    state.noticeRequested.connect(lambda title, message: notices.append((title, message)))

    assert state.save() is False
    assert notices == [(NO_IMAGE_TITLE, NO_IMAGE_MESSAGE)]
    assert pool.started == []


def test_full_flow_exports(state: AppState, tmp_path: Path, gradient: Image.Image) -> None:
    source = tmp_path / "input.png"
    gradient.save(source)
    previews: list[object] = []
    labels: list[str] = []
    exported: list[str] = []
    state.previewChanged.connect(previews.append)
    state.filterLabelChanged.connect(labels.append)
    state.exportSucceeded.connect(exported.append)

    assert state.load_image(source) is True
    state.choose_filter("gaussianBlur")
    state.set_intensity(0.5)

    assert labels == ["Gaussian"]
    assert len(previews) == 3
    assert all(isinstance(preview, Image.Image) for preview in previews)
    assert state.engine.parameters == {ParameterName.RADIUS: 100.0}

    assert state.save() is True
    assert len(exported) == 1
    assert Path(exported[0]).parent == tmp_path / "exports"
    assert state.last_export is not None and state.last_export.ok


def test_export_failure_is_reported(qapp, tmp_path: Path, pool: _ImmediatePool, gradient: Image.Image) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file in the way", encoding="utf-8")
    settings = Settings(None, {"export": {"directory": str(blocker / "exports")}})
    app_state = AppState.from_settings(settings, pool=pool)
    failures: list[str] = []
    app_state.exportFailed.connect(failures.append)

    app_state.set_image(gradient)
    assert app_state.save() is True

    assert len(failures) == 1
    assert app_state.last_export is not None and not app_state.last_export.ok
    assert app_state.engine.state is EngineState.RENDERED
    app_state.shutdown()


def test_filter_choice_before_image_updates_label_only(state: AppState) -> None:
    previews: list[object] = []
    state.previewChanged.connect(previews.append)

    state.choose_filter(FilterVariant.CRYSTALLIZE)
    state.set_intensity(0.7)

    assert state.filter_label == "Crystallize"
    assert previews == []
    assert state.engine.state is EngineState.EMPTY


def test_load_failure_keeps_state(state: AppState, tmp_path: Path) -> None:
    notices: list[tuple[str, str]] = []
    state.noticeRequested.connect(lambda title, message: notices.append((title, message)))

    assert state.load_image(tmp_path / "missing.png") is False
    assert notices and notices[0][0] == LOAD_FAILED_TITLE
    assert state.engine.state is EngineState.EMPTY


def test_available_filters_menu_order() -> None:
    filters = AppState.available_filters()
    assert filters[0] == ("crystallize", "Crystallize")
    assert filters[-1] == ("vignette", "Vignette")
    assert len(filters) == 7
