"""Shared fixtures: offscreen Qt application and an isolated user data dir."""

import os

os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

import pytest
from PyQt6.QtGui import QColor, QImage
from PyQt6.QtWidgets import QApplication

from apparel_designer.config import Config
from apparel_designer.core.scene import DesignScene
from apparel_designer.services import design_storage
from apparel_designer.utils.logging_config import LoggingConfig


@pytest.fixture(scope='session', autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(autouse=True)
def user_data_dir(tmp_path, monkeypatch):
    data_dir = tmp_path / 'user_data'
    data_dir.mkdir()
    monkeypatch.setattr(Config, 'get_user_data_dir', classmethod(lambda cls: data_dir))
    monkeypatch.setattr(design_storage, '_storage_instance', None)
    return data_dir


@pytest.fixture(autouse=True)
def isolated_logging():
    yield
    LoggingConfig.reset()


@pytest.fixture
def scene():
    return DesignScene()


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / 'logo.png'
    image = QImage(16, 12, QImage.Format.Format_ARGB32)
    image.fill(QColor('#ff0000'))
    assert image.save(str(path), 'PNG')
    return path


class SignalRecorder:
    """Collects the arguments of every emission of a Qt signal."""

    def __init__(self, signal):
        self.calls = []
        signal.connect(self._record)

    def _record(self, *args):
        self.calls.append(args[0] if len(args) == 1 else args)

    def __len__(self):
        return len(self.calls)


@pytest.fixture
def record():
    return SignalRecorder
