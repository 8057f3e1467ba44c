"""Qt implementations of the engine's collaborator protocols."""

from bo_gui.adapters.qsettings_store import QSettingsPreferenceStore
from bo_gui.adapters.qt_scheduler import QtScheduledTask, QtScheduler

__all__ = ["QSettingsPreferenceStore", "QtScheduledTask", "QtScheduler"]
