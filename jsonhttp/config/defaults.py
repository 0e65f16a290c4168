"""Default configuration values for the jsonhttp demo server."""

DEFAULT_CONFIG = {
    "host": "0.0.0.0",
    "port": 8080,
    "loggingLevel": "INFO",
    "contentType": "application/json; charset=utf-8",
}

DEFAULT_INI_TEMPLATE = """; jsonhttp server configuration
; Values in jsonhttp-settings.json take precedence over this file.

[Server]
host = 0.0.0.0
port = 8080

[Logging]
loggingLevel = INFO

[Response]
contentType = application/json; charset=utf-8
"""
