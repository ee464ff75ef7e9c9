#mindspan/ui/prefs.py

from PySide6.QtCore import QByteArray, QSettings

ORG = "Mindspan"
APP = "Mindspan"
KEY_WINDOW_GEOMETRY = "window/geometry"


def _s() -> QSettings:
    return QSettings(ORG, APP)


def get_saved_geometry() -> QByteArray | None:
    v = _s().value(KEY_WINDOW_GEOMETRY, None)
    if not v:
        return None
    return QByteArray(v)


def save_geometry(geometry: QByteArray) -> None:
    _s().setValue(KEY_WINDOW_GEOMETRY, geometry)
