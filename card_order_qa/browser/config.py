DEFAULT_CONFIG = {
    "headless": True,
    "viewport": {"width": 1280, "height": 720},
    "language": "ru-RU",
    "action_timeout_ms": 5000,
    "navigation_timeout_ms": 30000,
}
