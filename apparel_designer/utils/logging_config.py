"""
Logging setup for Apparel Designer

Records from every `apparel_designer.*` module go to a session log file in the
user data logs folder, to stdout, and (while a design window is open) to the
window's log dock.
"""
import html
import logging
import sys
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import QPlainTextEdit
from PyQt6.QtCore import QObject, pyqtSignal, Qt


PACKAGE_LOGGER = "apparel_designer"
LOG_FILE_NAME = "apparel_designer.log"
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DOCK_FORMAT = '%(asctime)s %(levelname)-7s %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(message)s'

# Dock text colour per level
LEVEL_COLORS = {
    logging.DEBUG: '#868e96',
    logging.INFO: '#212529',
    logging.WARNING: '#e67700',
    logging.ERROR: '#c92a2a',
    logging.CRITICAL: '#c92a2a',
}


class LoggingConfig:
    """Owns the handlers attached to the package logger"""

    _log_file_path: Optional[Path] = None
    _handlers: list = []
    _dock_handler: Optional['QtLogHandler'] = None

    @classmethod
    def package_logger(cls) -> logging.Logger:
        return logging.getLogger(PACKAGE_LOGGER)

    @classmethod
    def setup_logging(cls, log_dir: Path, console_level: int = logging.INFO):
        """
        Attach the file and console handlers.

        The file always receives DEBUG; console_level only filters stdout.
        Repeated calls keep the first setup.
        """
        if cls._handlers:
            return

        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        cls._log_file_path = log_dir / LOG_FILE_NAME

        file_handler = logging.FileHandler(cls._log_file_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

        logger = cls.package_logger()
        logger.setLevel(logging.DEBUG)
        for handler in (file_handler, console_handler):
            logger.addHandler(handler)
        cls._handlers = [file_handler, console_handler]

        logger.info(f"Logging to {cls._log_file_path}")

    @classmethod
    def reset(cls):
        """Detach and close every handler installed here."""
        cls.remove_widget_handler()
        logger = cls.package_logger()
        for handler in cls._handlers:
            logger.removeHandler(handler)
            handler.close()
        cls._handlers = []
        cls._log_file_path = None
        logger.setLevel(logging.NOTSET)

    @classmethod
    def add_widget_handler(cls, text_widget: QPlainTextEdit,
                           level: int = logging.INFO) -> 'QtLogHandler':
        """Show package log records in a log dock; replaces any previous dock."""
        cls.remove_widget_handler()

        handler = QtLogHandler(text_widget)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(DOCK_FORMAT, datefmt='%H:%M:%S'))
        logger = cls.package_logger()
        if logger.level == logging.NOTSET or logger.level > level:
            logger.setLevel(level)
        logger.addHandler(handler)

        cls._dock_handler = handler
        return handler

    @classmethod
    def remove_widget_handler(cls):
        if cls._dock_handler is not None:
            cls.package_logger().removeHandler(cls._dock_handler)
            cls._dock_handler = None

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        return logging.getLogger(name)

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        return cls._log_file_path


class QtLogHandler(logging.Handler, QObject):
    """
    Handler that writes records into a QPlainTextEdit, coloured by level.

    Records may come from any thread; the widget is only touched through a
    queued signal on the GUI thread.
    """

    record_ready = pyqtSignal(str, int)  # formatted message, level

    def __init__(self, text_widget: QPlainTextEdit):
        logging.Handler.__init__(self)
        # Deleted with the widget, which drops any appends still queued
        QObject.__init__(self, text_widget)

        self._text_widget = text_widget
        self.record_ready.connect(self._append, Qt.ConnectionType.QueuedConnection)

    @property
    def text_widget(self) -> QPlainTextEdit:
        return self._text_widget

    def emit(self, record):
        try:
            self.record_ready.emit(self.format(record), record.levelno)
        except Exception:
            self.handleError(record)

    def _append(self, message: str, level: int):
        color = LEVEL_COLORS.get(level, LEVEL_COLORS[logging.INFO])
        self._text_widget.appendHtml(
            f'<span style="color:{color}; white-space:pre;">{html.escape(message)}</span>'
        )


__all__ = ['LoggingConfig', 'QtLogHandler', 'PACKAGE_LOGGER']
