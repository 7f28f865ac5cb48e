"""localekit - multi-app translation runtime.

Sub-packages:
- configuration: pydantic-settings based configuration
- logging: structlog setup and module loggers
- resilience: retry policy for deferred initialization
- i18n: locale resolution, catalog loading/merging, key lookup
"""
