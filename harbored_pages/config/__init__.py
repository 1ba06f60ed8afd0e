"""Load and validate render configuration YAML for harbored_pages.

This subpackage parses an ``hmod-pages.yaml`` file, merges macro files with
inline macro definitions, and produces the :class:`RenderConfig` dataclass
the writers consume. The primary entry point is :func:`load_render_config`;
``RenderConfig()`` supplies the defaults when no file is used.

Examples
--------
>>> from harbored_pages.config import RenderConfig
>>> RenderConfig().markdown.pygments_style
'monokai'
"""

from .loader import load_render_config
from .models import MarkdownConfig, RenderConfig, RenderConfigError

__all__ = [
    "MarkdownConfig",
    "RenderConfig",
    "RenderConfigError",
    "load_render_config",
]
