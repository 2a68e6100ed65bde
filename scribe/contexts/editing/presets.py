"""
Named formatting presets.

formatting_presets.yaml groups presets by category (spacing, margins,
typography); each is addressed as <category>_<name>. A preset only sets the
FormattingSettings keys it lists, so presets from different categories stack
and a later preset wins where two overlap:

    apply_presets(document, ["typography_compact", "margins_wide"])
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from scribe.contexts.editing.exceptions import PresetNotFoundError
from scribe.contexts.editing.logger import log_presets_applied
from scribe.contexts.editing.operations import update_formatting
from scribe.contexts.editing.resume_document import ResumeDocument

load_dotenv()
FORMATTING_PRESETS_PATH = Path(
    os.getenv("FORMATTING_PRESETS_PATH", Path(__file__).parent / "formatting_presets.yaml")
)


def load_formatting_presets(config_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Read the presets file as {"<category>_<name>": {jsonKey: value}}.

    Args:
        config_path: Optional path to config file (defaults to FORMATTING_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to formatting overrides
        Example: {"spacing_tight": {"itemSpacing": -3, ...}, ...}
    """
    if config_path is None:
        config_path = FORMATTING_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    # Flatten: category.name -> category_name
    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config

    return flattened


def apply_presets(
    document: ResumeDocument,
    preset_names: List[str],
    config_path: Optional[Path] = None,
) -> ResumeDocument:
    """
    Apply named formatting presets to a document.

    Presets are applied in order, with later presets overriding earlier ones.
    Formatting values the presets do not mention are kept.

    Args:
        document: Source document (left unchanged)
        preset_names: Preset names to apply (e.g., ["spacing_tight", "margins_narrow"])
        config_path: Optional path to formatting_presets.yaml

    Returns:
        New document with the presets' formatting applied

    Raises:
        PresetNotFoundError: If a preset name is not defined
    """
    presets = load_formatting_presets(config_path)

    # Resolve every name before applying any
    for preset_name in preset_names:
        if preset_name not in presets:
            raise PresetNotFoundError(preset_name, available=list(presets))

    for preset_name in preset_names:
        document = update_formatting(document, **presets[preset_name])

    if preset_names:
        log_presets_applied(preset_names)
    return document
