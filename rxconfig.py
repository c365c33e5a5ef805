"""
TaskView — Reflex configuration.

  /       → Task list
  /tasks  → Task list
"""

import reflex as rx

config = rx.Config(
    app_name="taskview",
    # Frontend port for dev server
    frontend_port=3001,
    # API / backend port
    backend_port=8000,
    # Telemetry
    telemetry_enabled=False,
    # Disable unused default plugins
    disable_plugins=["reflex.plugins.sitemap.SitemapPlugin"],
)
