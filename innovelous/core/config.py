import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the Innovelous site.
    Deployments provide backend credentials via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Hosted backend (tables + storage)
    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_KEY = os.getenv('SUPABASE_KEY') or os.getenv('SUPABASE_ANON_KEY')
    REMOTE_TIMEOUT = float(os.getenv('REMOTE_TIMEOUT', '15'))

    # Local log store
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, 'app_logs.db'))

    # Table names
    PROJECTS_TABLE = "projects"
    CATEGORIES_TABLE = "categories"
    SERVICES_TABLE = "services"
    DOWNLOADS_TABLE = "downloads"
    ORDERS_TABLE = "orders"
    SETTINGS_TABLE = "admin_settings"

    # Storage buckets
    PROJECT_IMAGES_BUCKET = os.getenv('PROJECT_IMAGES_BUCKET', 'project-images')
    DOWNLOADS_BUCKET = os.getenv('DOWNLOADS_BUCKET', 'downloads')
    ORDER_FILES_BUCKET = os.getenv('ORDER_FILES_BUCKET', 'order-files')

    # Site
    BRAND_NAME = os.getenv('BRAND_NAME', 'Innovelous Tech')
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',') if o.strip()]

    # Port for local server
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val:
        return val
    return os.getenv(key, default)
