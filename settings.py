"""App settings.

Flask loads this module on startup via ``app.config.from_pyfile(...)``.

``SEED_PROPERTIES`` holds the first-boot installer properties. Environment
variables (``SEED_ROOT_PRINCIPAL`` etc.) override them, see
``config.properties_from_env``.
"""

# Single source of truth for app configuration.
SETTINGS: dict[str, object] = {
    # Flask
    "SECRET_KEY": "dev-not-secret",
    # Logging
    "LOG_LEVEL": "INFO",
    # Installer
    "SEED_ON_STARTUP": False,
    "SEED_PROPERTIES": {
        "contextDataPath": "/META-INF/data/",
        "defaultContextName": "DEFAULT",
        "countryFile": "countries.xml",
        "stateFile": "BR/states.xml",
        "defaultCountry": "BR",
        "rootEntityAlias": "DEFAULT",
        "rootEntityStateCode": "SP",
        "rootEntityCityCode": "3550308",
        "rootPrincipal": "admin@localhost",
        "rootFirstName": "Admin",
        "rootLastName": "Root",
    },
}

# Optional convenience exports (mirrors earlier style).
SECRET_KEY = SETTINGS["SECRET_KEY"]
LOG_LEVEL = SETTINGS["LOG_LEVEL"]
SEED_ON_STARTUP = SETTINGS["SEED_ON_STARTUP"]
SEED_PROPERTIES = SETTINGS["SEED_PROPERTIES"]
