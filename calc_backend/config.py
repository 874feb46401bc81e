"""App-wide configuration.

Values here are defaults; ``CALC_*`` environment variables override them
(``CALC_LOG_LEVEL=DEBUG``, ``CALC_CORS_ORIGINS='["https://example.org"]'``).
"""


class Config:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL = "INFO"
    DEFAULT_YEARS_IN_RETIREMENT = 30
