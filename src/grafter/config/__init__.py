from .loader import GrafterConfig, ConfigError, load_config_from_path, OUTPUT_FORMATS

__all__ = ["GrafterConfig", "ConfigError", "load_config_from_path", "OUTPUT_FORMATS"]
