"""Domain models package."""

from marketline.domain.models.enums import Indicator, EditCommand, EditorMode, Key
from marketline.domain.models.credential import Credential

__all__ = [
    "Indicator",
    "EditCommand",
    "EditorMode",
    "Key",
    "Credential",
]
