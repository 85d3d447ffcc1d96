"""
DesignStorage - File storage for saved designs

Handles saving/loading design JSON files and PNG print exports.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from PyQt6.QtGui import QImage

from ..config import Config
from ..utils.image_utils import content_bounds

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class DesignStorage:
    """
    Manages design files on disk.

    File structure:
        {user data}/designs/
        ├── my_team_singlet.json   # Design data (elements, product, options)
        ├── my_team_singlet.png    # Transparent print export
        └── manifest.json          # Index of all designs
    """

    MANIFEST_NAME = "manifest.json"

    def __init__(self, base_path: Optional[Path] = None):
        if base_path is None:
            base_path = Config.get_designs_dir()
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base

    def get_design_path(self, name: str) -> Path:
        """Get path for a design's JSON."""
        return self._base / f"{Config.sanitize_file_name(name)}.json"

    def get_png_path(self, name: str) -> Path:
        """Get path for a design's PNG export."""
        return self._base / f"{Config.sanitize_file_name(name)}.png"

    def get_manifest_path(self) -> Path:
        return self._base / self.MANIFEST_NAME

    # ==================== Save/Load ====================

    def save_design(self, name: str, data: Dict[str, Any]) -> bool:
        """
        Save design data under a name.

        Args:
            name: Design name (sanitized for the file name)
            data: Design data as produced by DesignScene.to_dict()

        Returns:
            True if saved successfully
        """
        try:
            path = self.get_design_path(name)
            existing = self.load_design(name)
            now = _now()

            payload = dict(data)
            payload['name'] = name
            payload['created_at'] = existing.get('created_at', now) if existing else now
            payload['modified_at'] = now

            with open(path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2)

            self._update_manifest()
            logger.info(f"Saved design '{name}' to {path}")
            return True

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving design '{name}': {e}")
            return False

    def load_design(self, name: str) -> Optional[Dict[str, Any]]:
        """Load design data, or None when missing or unreadable."""
        path = self.get_design_path(name)
        if not path.exists():
            return None
        return self.load_design_file(path)

    def load_design_file(self, path: Path) -> Optional[Dict[str, Any]]:
        """Load design data from an arbitrary JSON file."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading design {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.error(f"Design file {path} does not contain an object")
            return None
        return data

    def delete_design(self, name: str) -> bool:
        """Delete a design's JSON and PNG files."""
        try:
            for path in (self.get_design_path(name), self.get_png_path(name)):
                if path.exists():
                    path.unlink()
            self._update_manifest()
            logger.info(f"Deleted design '{name}'")
            return True

        except OSError as e:
            logger.error(f"Error deleting design '{name}': {e}")
            return False

    def has_design(self, name: str) -> bool:
        return self.get_design_path(name).exists()

    def list_designs(self) -> List[Dict[str, Any]]:
        """Summaries of saved designs, newest first."""
        designs = []
        for path in self._base.glob('*.json'):
            if path.name == self.MANIFEST_NAME:
                continue
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError):
                continue
            if not isinstance(data, dict):
                continue
            designs.append({
                'name': data.get('name', path.stem),
                'file': path.name,
                'product': data.get('product'),
                'element_count': len(data.get('elements', [])),
                'modified_at': data.get('modified_at', ''),
                'has_png': path.with_suffix('.png').exists(),
            })
        designs.sort(key=lambda d: d['modified_at'], reverse=True)
        return designs

    # ==================== PNG Export ====================

    def export_png(self, name: str, image: QImage) -> Optional[Dict[str, Any]]:
        """
        Write a rendered design as PNG next to its JSON.

        Args:
            name: Design name
            image: Rendered design (typically a transparent print render)

        Returns:
            Export info with path, size and the printed-area bounds, or None on failure
        """
        path = self.get_png_path(name)
        if image.isNull() or not image.save(str(path), 'PNG'):
            logger.error(f"Error writing PNG for design '{name}' to {path}")
            return None

        bounds = content_bounds(image)
        self._update_manifest()
        logger.info(f"Exported PNG for design '{name}' ({image.width()}x{image.height()})")
        return {
            'path': path,
            'size': [image.width(), image.height()],
            'content_bounds': list(bounds) if bounds else None,
        }

    # ==================== Manifest ====================

    def _update_manifest(self):
        """Rewrite the manifest index from the design files on disk."""
        designs = {}
        for entry in self.list_designs():
            designs[entry['name']] = {
                'json': entry['file'],
                'png': Path(entry['file']).with_suffix('.png').name if entry['has_png'] else None,
                'product': entry['product'],
                'element_count': entry['element_count'],
                'modified_at': entry['modified_at'],
            }

        manifest = {
            'version': Config.DESIGN_JSON_VERSION,
            'designs': designs,
            'total_designs': len(designs),
        }

        with open(self.get_manifest_path(), 'w', encoding='utf-8') as f:
            json.dump(manifest, f, indent=2)

    def get_manifest(self) -> Optional[Dict[str, Any]]:
        path = self.get_manifest_path()
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError):
            return None


# ==================== Singleton ====================

_storage_instance: Optional[DesignStorage] = None


def get_design_storage() -> DesignStorage:
    """Get singleton DesignStorage instance."""
    global _storage_instance
    if _storage_instance is None:
        _storage_instance = DesignStorage()
    return _storage_instance


__all__ = ['DesignStorage', 'get_design_storage']
