"""
Centralized settings and path configuration for the quotation tool.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Where exported workbooks are written
    output_dir: Path

    # Letterhead used by the printable document
    company_name: str = "V & V ALUNATION"
    company_address: str = (
        "15/A Chakranagar Main Road, Valmiki Nagar 10th Main 3rd Cross, "
        "Andrahalli, Bangalore - 560091"
    )
    company_gstin: str = "29DVMPS1625D1ZC"

    # Rate pre-filled in the item form
    default_price_per_sqft: float = 0.0
    currency_symbol: str = "₹"

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()

        output_dir = os.environ.get('QUOTATION_OUTPUT_DIR')

        return cls(
            project_root=root,
            output_dir=Path(output_dir) if output_dir else root / 'outputs',
            default_price_per_sqft=float(os.environ.get('QUOTATION_DEFAULT_PRICE', 0) or 0),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
