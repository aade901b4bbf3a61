"""Pursewise application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable, Optional

from flask import Flask

from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths to register."""

    yield "pursewise.blueprints.auth"
    yield "pursewise.blueprints.transactions"
    yield "pursewise.blueprints.savings"
    yield "pursewise.blueprints.categories"
    yield "pursewise.blueprints.dashboard"
    yield "pursewise.blueprints.plaid"


def create_app(
    config_name: str | None = None,
    *,
    config: Optional[BaseConfig] = None,
    context=None,
) -> Flask:
    """Create and configure the Flask application instance.

    ``context`` lets callers inject a prebuilt :class:`~pursewise.context.AppContext`
    (tests use this to supply fake gateways or shared stores).
    """

    from . import cli
    from .context import EXTENSION_KEY, create_app_context
    from .errors import register_error_handlers
    from .logging_config import setup_logging

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["PURSEWISE_CONFIG"] = config_obj
    app.json.sort_keys = False

    setup_logging(config_obj)
    app.extensions[EXTENSION_KEY] = context or create_app_context(config_obj)

    register_error_handlers(app)
    _register_blueprints(app)
    cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
