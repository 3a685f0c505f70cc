"""Domain layer - pure models with no I/O."""

from marketline.domain.models import (
    Indicator,
    EditCommand,
    EditorMode,
    Key,
    Credential,
)

__all__ = [
    "Indicator",
    "EditCommand",
    "EditorMode",
    "Key",
    "Credential",
]
