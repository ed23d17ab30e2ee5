import json
import logging
import os

from babel import Locale, UnknownLocaleError

THEMES = ('light', 'dark')

DEFAULT_CONFIG = {
    'locale': 'ro',
    'theme': 'light',
}


def _config_path():
    override = os.environ.get('TIMEPASSED_CONFIG')
    if override:
        return override
    base = os.path.join(os.path.expanduser('~'), '.timepassed')
    os.makedirs(base, exist_ok=True)
    return os.path.join(base, 'timepassed_config.json')


def validate_config(cfg: dict) -> dict:
    """Prüft die Werte und ergänzt fehlende Schlüssel; wirft ValueError bei Unsinn."""
    if cfg is not None and not isinstance(cfg, dict):
        raise ValueError("Konfiguration muss ein JSON-Objekt sein")
    merged = dict(DEFAULT_CONFIG)
    merged.update(cfg or {})
    if merged['theme'] not in THEMES:
        raise ValueError(f"Unbekanntes Theme: {merged['theme']!r}")
    try:
        Locale.parse(merged['locale'])
    except (UnknownLocaleError, ValueError, TypeError) as e:
        raise ValueError(f"Unbekannte Locale: {merged['locale']!r}") from e
    return merged


def load_config():
    path = _config_path()
    if not os.path.exists(path):
        return dict(DEFAULT_CONFIG)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return validate_config(json.load(f))
    except (OSError, ValueError) as e:
        # json.JSONDecodeError ist ein ValueError
        logging.error(f"[TimePassed] Konfiguration {path} unbrauchbar, nutze Standardwerte: {e}")
        return dict(DEFAULT_CONFIG)


def save_config(cfg: dict):
    cfg = validate_config(cfg)
    path = _config_path()
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)
