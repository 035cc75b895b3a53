"""
Innovelous - Agency Site and Admin Back-Office
==============================================

A Flask extension for a small agency website backed by a hosted backend
(Postgres REST tables + object storage):
- Public pages: home, portfolio, downloads, order form
- Read-only public JSON API with CORS
- Single-admin back-office for projects, categories, services, downloads
  and client orders

Usage:
    from flask import Flask
    from innovelous import Innovelous

    app = Flask(__name__)
    Innovelous(app)
"""

import logging

from .core.config import Config
from .core.icons import resolve_icon
from .core.remote import RemoteClient

__version__ = '0.1.0'

logger = logging.getLogger(__name__)


class Innovelous:
    """Registers every module on a Flask app and owns the shared backend client"""

    def __init__(self, app=None, config=None, client=None):
        self.config = dict(config or {})
        self.client = client
        self.auth_gate = None
        self._registered = []
        if app is not None:
            self.init_app(app)

    def _setting(self, app, key, default=None):
        """Extension config, then app.config, then Config"""
        if self.config.get(key):
            return self.config[key]
        if app.config.get(key):
            return app.config[key]
        return getattr(Config, key, None) or default

    def init_app(self, app):
        from .modules.auth.gate import AuthGate

        if not app.config.get('SECRET_KEY'):
            app.config['SECRET_KEY'] = Config.SECRET_KEY

        if self.client is None:
            self.client = RemoteClient(
                self._setting(app, 'SUPABASE_URL'),
                self._setting(app, 'SUPABASE_KEY'),
                timeout=float(self._setting(app, 'REMOTE_TIMEOUT', 15)),
            )
        self.auth_gate = AuthGate(self.client, table=self._setting(app, 'SETTINGS_TABLE', 'admin_settings'))

        self.config.setdefault('brand_name', self._setting(app, 'BRAND_NAME', 'Innovelous Tech'))

        app.extensions['innovelous'] = self
        self._register_blueprints(app)
        app.context_processor(self._inject_context)
        logger.info(f"Innovelous initialised with modules: {', '.join(self._registered)}")

    def _register_blueprints(self, app):
        from .modules.auth import auth_bp
        from .modules.dashboard import dashboard_bp
        from .modules.projects import projects_bp
        from .modules.categories import categories_bp
        from .modules.services import services_bp
        from .modules.downloads import downloads_bp
        from .modules.orders import orders_bp
        from .modules.public import public_bp
        from .modules.public_api import public_api_bp

        for blueprint in (auth_bp, dashboard_bp, projects_bp, categories_bp, services_bp,
                          downloads_bp, orders_bp, public_bp, public_api_bp):
            app.register_blueprint(blueprint)
            self._registered.append(blueprint.name)

    def get_registered_modules(self):
        return list(self._registered)

    def _inject_context(self):
        return {
            'innovelous_config': self.config,
            'brand_name': self.config['brand_name'],
            'icon_for': resolve_icon,
        }


__all__ = ['Innovelous', '__version__']
