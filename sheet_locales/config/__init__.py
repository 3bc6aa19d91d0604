from .loader import DEFAULT_CONFIG_PATH, ConfigError, PipelineConfig, build_config, load_config
from .presets import PRESETS, SheetPreset, get_preset

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "PipelineConfig",
    "build_config",
    "load_config",
    "PRESETS",
    "SheetPreset",
    "get_preset",
]
