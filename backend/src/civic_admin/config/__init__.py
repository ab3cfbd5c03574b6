from .settings import Settings, configure_logging, load_settings

__all__ = ["Settings", "configure_logging", "load_settings"]
