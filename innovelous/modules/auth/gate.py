"""
Admin Session Gate
==================

The single admin credential lives in the backend settings table under a
well-known key as ``{email, password_hash}``. A successful login sets a flag
in the signed session cookie, so it survives reloads and is shared by every
tab of the same browser. There is no expiry; logout clears the flag locally.
"""

from functools import wraps

import bcrypt
from flask import session, g, current_app, request, redirect, url_for, jsonify, render_template

from ...core.errors import ValidationError
from ...core.logging_service import LoggingService
from ...core.remote import RemoteError

SETTINGS_TABLE = 'admin_settings'
CREDENTIALS_KEY = 'admin_credentials'
SESSION_FLAG = 'admin_authenticated'
MIN_PASSWORD_LENGTH = 6
# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72

GATE_LOADING = 'loading'
GATE_REDIRECTED = 'redirected'
GATE_RENDERED = 'rendered'


def password_too_long(password):
    return len((password or '').encode('utf-8')) > MAX_PASSWORD_BYTES


def hash_password(password):
    """Salted bcrypt hash"""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password, password_hash):
    """Check a password against a bcrypt hash; malformed hashes never match"""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except (ValueError, TypeError):
        return False


class AuthGate:
    """Decides whether the current browser session may use the admin area"""

    def __init__(self, client, table=SETTINGS_TABLE):
        self.client = client
        self.settings = client.table(table)

    # ===== Session flag =====

    def restore(self):
        """Initial check for this request: read the persisted flag"""
        g._admin_gate_restored = True
        return self.is_authenticated

    @property
    def loading(self):
        return not g.get('_admin_gate_restored', False)

    @property
    def is_authenticated(self):
        return session.get(SESSION_FLAG) is True

    # ===== Credential record =====

    def get_credentials(self):
        """Return {email, password_hash} or None. Raises RemoteError."""
        row = self.settings.first(setting_name=CREDENTIALS_KEY)
        if not row:
            return None
        value = row.get('setting_value') or {}
        if not isinstance(value, dict) or not value.get('email') or not value.get('password_hash'):
            LoggingService.warning('auth', 'Credential record is malformed')
            return None
        return value

    def set_credentials(self, email, password):
        """Create or replace the credential record"""
        if not email or not password:
            raise ValidationError("Email and password are required", fields=['email', 'password'])
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long", fields=['password'])
        if password_too_long(password):
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long", fields=['password'])
        return self.settings.upsert({
            'setting_name': CREDENTIALS_KEY,
            'setting_value': {
                'email': email.strip().lower(),
                'password_hash': hash_password(password),
            },
        }, on_conflict='setting_name')

    # ===== Operations =====

    def login(self, email, password):
        """Verify credentials and set the session flag. Never raises."""
        try:
            stored = self.get_credentials()
        except RemoteError as e:
            LoggingService.error('auth', f"Login failed: could not fetch credentials: {e}")
            return False

        if not stored:
            LoggingService.warning('auth', 'Login attempted but no admin credentials exist')
            return False

        email_matches = (email or '').strip().lower() == stored['email'].strip().lower()
        if not (verify_password(password, stored['password_hash']) and email_matches):
            LoggingService.warning('auth', 'Failed admin login', {'email': email})
            return False

        session[SESSION_FLAG] = True
        LoggingService.log_action('auth', 'admin login')
        return True

    def logout(self):
        session.pop(SESSION_FLAG, None)
        LoggingService.log_action('auth', 'admin logout')

    def change_password(self, current_password, new_password):
        """Verify the current password and store a hash of the new one"""
        try:
            stored = self.get_credentials()
        except RemoteError as e:
            LoggingService.error('auth', f"Change password failed: could not fetch credentials: {e}")
            return False

        if not stored:
            LoggingService.error('auth', 'Cannot change password: admin credentials not found')
            return False

        if not verify_password(current_password, stored['password_hash']):
            LoggingService.warning('auth', 'Change password failed: current password mismatch')
            return False

        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            LoggingService.warning('auth', 'Change password failed: new password too short')
            return False

        if password_too_long(new_password):
            LoggingService.warning('auth', 'Change password failed: new password too long')
            return False

        try:
            self.settings.upsert({
                'setting_name': CREDENTIALS_KEY,
                'setting_value': {
                    'email': stored['email'],
                    'password_hash': hash_password(new_password),
                },
            }, on_conflict='setting_name')
        except RemoteError as e:
            LoggingService.error('auth', f"Error updating password: {e}")
            return False

        LoggingService.log_action('auth', 'admin password changed')
        return True


# ===== Route gate =====

def get_auth_gate():
    return current_app.extensions['innovelous'].auth_gate


def resolve_gate(auth_gate):
    """Where a protected view ends up for the current request"""
    if auth_gate.loading:
        return GATE_LOADING
    if not auth_gate.is_authenticated:
        return GATE_REDIRECTED
    return GATE_RENDERED


def admin_required(f):
    """Decorator to require admin login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        state = resolve_gate(get_auth_gate())
        if state == GATE_LOADING:
            return render_template('auth/loading.html'), 503
        if state == GATE_REDIRECTED:
            return redirect(url_for('auth.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


def admin_api_required(f):
    """Decorator for JSON endpoints: 401 instead of a redirect"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if resolve_gate(get_auth_gate()) != GATE_RENDERED:
            return jsonify({'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function
