"""
Global configuration for Apparel Designer

Canvas geometry, element defaults, decoration styling and the persistent
settings file all live here so widgets and renderers share one source.
"""

import os
import json
import sys
from pathlib import Path
from typing import Any, Final


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Apparel Designer"
    APP_VERSION: Final[str] = "1.0.0"
    APP_AUTHOR: Final[str] = "Apparel Designer"

    # Paths
    APP_ROOT: Final[Path] = Path(__file__).parent

    # Canvas surface
    CANVAS_WIDTH: Final[int] = 400
    CANVAS_HEIGHT: Final[int] = 500
    BACKGROUND_COLOR: Final[str] = '#f8f9fa'

    # Garment silhouette
    GARMENT_BUDGET_RATIO: Final[float] = 0.6   # Share of canvas width
    GARMENT_WIDTH_RATIO: Final[float] = 0.8    # Width relative to height
    GARMENT_FILL_COLOR: Final[str] = '#ffffff'
    GARMENT_STROKE_COLOR: Final[str] = '#dee2e6'
    GARMENT_STROKE_WIDTH: Final[float] = 2.0
    GARMENT_DETAIL_COLOR: Final[str] = '#ced4da'

    # Design zones as (top, bottom) fractions of garment height
    CHEST_ZONE: Final[tuple] = (0.25, 0.45)
    LOWER_ZONE: Final[tuple] = (0.55, 0.75)
    ZONE_WIDTH_RATIO: Final[float] = 0.7
    ZONE_FILL_COLOR: Final[str] = '#007bff'
    ZONE_OPACITY: Final[float] = 0.08

    # Product label
    LABEL_COLOR: Final[str] = '#6c757d'
    LABEL_FONT_FAMILY: Final[str] = 'Arial'
    LABEL_FONT_SIZE: Final[int] = 12
    LABEL_OFFSET: Final[int] = 20  # Pixels below the garment box

    # Element defaults
    MIN_ELEMENT_SIZE: Final[int] = 20
    DEFAULT_FONT_SIZE: Final[int] = 24
    MIN_FONT_SIZE: Final[int] = 8
    MAX_FONT_SIZE: Final[int] = 72
    DEFAULT_TEXT_COLOR: Final[str] = '#000000'
    DEFAULT_FONT_FAMILY: Final[str] = 'Arial'
    TEXT_DEFAULT_POS: Final[tuple] = (150, 200)
    TEXT_DEFAULT_SIZE: Final[tuple] = (200, 50)
    IMAGE_DEFAULT_POS: Final[tuple] = (150, 150)
    IMAGE_DEFAULT_SIZE: Final[tuple] = (100, 100)

    FONT_FAMILIES: Final[list] = [
        "Arial",
        "Helvetica",
        "Times New Roman",
        "Georgia",
        "Impact",
    ]

    # Image placeholder
    PLACEHOLDER_FILL: Final[str] = '#e9ecef'
    PLACEHOLDER_BORDER: Final[str] = '#adb5bd'
    PLACEHOLDER_TEXT_COLOR: Final[str] = '#6c757d'
    PLACEHOLDER_LABEL: Final[str] = 'IMAGE'
    IMAGE_CACHE_SIZE: Final[int] = 32

    # Selection decorations
    SELECTION_COLOR: Final[str] = '#007bff'
    SELECTION_WIDTH: Final[float] = 2.0
    SELECTION_DASH: Final[list] = [5, 5]
    SELECTION_INSET: Final[int] = 2
    HANDLE_SIZE: Final[int] = 8
    ROTATION_HANDLE_OFFSET: Final[int] = 15
    ROTATION_HANDLE_RADIUS: Final[int] = 5

    # Tool panel palette (text colours)
    COLOR_PALETTE: Final[list] = [
        "#000000", "#FFFFFF", "#FF0000", "#00FF00",
        "#0000FF", "#FFFF00", "#FF00FF", "#00FFFF",
        "#800000", "#008000", "#000080", "#808000",
        "#800080", "#008080", "#C0C0C0", "#808080",
    ]

    # Preset graphics offered by the tool panel
    PRESET_GRAPHICS: Final[list] = [
        "https://images.unsplash.com/photo-1599305445671-ac291c95aaa9?w=100&h=100&fit=crop",
        "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=100&h=100&fit=crop",
        "https://images.unsplash.com/photo-1594633313593-bab3825d0caf?w=100&h=100&fit=crop",
        "https://images.unsplash.com/photo-1521572267360-ee0c2909d518?w=100&h=100&fit=crop",
    ]

    # Storage
    DESIGNS_FOLDER_NAME: Final[str] = "designs"
    SETTINGS_FILE_NAME: Final[str] = "settings.json"
    DESIGN_JSON_VERSION: Final[str] = "1.0"

    # Window settings
    DEFAULT_WINDOW_WIDTH: Final[int] = 1100
    DEFAULT_WINDOW_HEIGHT: Final[int] = 760

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Uses system AppData/Local (Windows), Application Support (macOS) or
        .local/share (Linux). A 'portable.txt' next to the package switches to
        a local 'data' folder instead.
        """
        portable_flag = cls.APP_ROOT.parent / 'portable.txt'
        if portable_flag.exists():
            user_dir = cls.APP_ROOT.parent / 'data'
        elif sys.platform == 'win32':
            base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
            user_dir = base_path / 'ApparelDesigner'
        elif sys.platform == 'darwin':
            user_dir = Path.home() / 'Library' / 'Application Support' / 'ApparelDesigner'
        else:
            user_dir = Path.home() / '.local' / 'share' / 'ApparelDesigner'

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get the logs folder inside the user data directory."""
        return cls.get_user_data_dir() / 'logs'

    @classmethod
    def get_designs_dir(cls) -> Path:
        """Get the folder saved designs are written to."""
        designs_dir = cls.get_user_data_dir() / cls.DESIGNS_FOLDER_NAME
        designs_dir.mkdir(parents=True, exist_ok=True)
        return designs_dir

    @classmethod
    def get_settings_file(cls) -> Path:
        """Get settings JSON file path"""
        return cls.get_user_data_dir() / cls.SETTINGS_FILE_NAME

    @classmethod
    def load_settings(cls) -> dict:
        """Load the settings file, or an empty dict when missing or unreadable."""
        settings_file = cls.get_settings_file()
        if settings_file.exists():
            try:
                with open(settings_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
            except (OSError, ValueError):
                pass
        return {}

    @classmethod
    def load_setting(cls, key: str, default: Any = None) -> Any:
        """Read one value from the settings file."""
        return cls.load_settings().get(key, default)

    @classmethod
    def save_setting(cls, key: str, value: Any) -> bool:
        """
        Save one value to the settings file, keeping the other keys.

        Returns:
            bool: True if saved successfully, False otherwise
        """
        try:
            settings = cls.load_settings()
            settings[key] = value

            settings_file = cls.get_settings_file()
            settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(settings_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            return True
        except (OSError, TypeError):
            return False

    @classmethod
    def sanitize_file_name(cls, name: str) -> str:
        """
        Sanitize a design name for use as a file name.

        Args:
            name: Design name as typed by the user

        Returns:
            Safe file name stem
        """
        import re
        safe = re.sub(r'[<>:"/\\|?*]', '_', name)
        safe = safe.strip(' .')
        safe = re.sub(r'_+', '_', safe)
        return safe or 'design'


__all__ = ['Config']
