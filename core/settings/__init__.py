# Settings package
from core.settings.app import AppSettings, NotificationSettings, get_app_settings, load_app_settings

__all__ = ["AppSettings", "NotificationSettings", "get_app_settings", "load_app_settings"]
