"""Infrastructure modules for the user directory.

Centralized infrastructure components:
- clients: HTTP gateway (Gateway, HttpGateway, HttpResponse)
- configuration: Settings management (settings, Settings, PlexSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- operations: Operation results and error classification
- services: Provider functions (get_settings, get_users_directory)
"""
